from datetime import datetime, timezone

from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, UniqueConstraint
from database import Base


class Streak(Base):
    __tablename__ = "streaks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    current_streak = Column(Integer, default=0, nullable=False)
    last_entry_date = Column(Date, nullable=True)
    longest_streak = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("user_id", name="uq_streak_user"),
    )

    def state(self) -> dict:
        """Snapshot in the shape the streak engine consumes."""
        return {
            "current_streak": self.current_streak or 0,
            "last_entry_date": self.last_entry_date,
            "longest_streak": self.longest_streak or 0,
        }
