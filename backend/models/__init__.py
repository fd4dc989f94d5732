# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from models.user import User
from models.streak import Streak
from models.day_entry import DayEntry

__all__ = [
    "User",
    "Streak",
    "DayEntry",
]
