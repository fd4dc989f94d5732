"""
user_service.py — Accounts
Registration (with the user's streak row) and email/password authentication.
"""

import logging

from sqlalchemy.orm import Session

from auth import hash_password, verify_password
from models.user import User
from services.streak_service import StreakService

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def get(db: Session, user_id: int) -> User | None:
        return db.query(User).filter_by(id=user_id).first()

    @staticmethod
    def get_by_email(db: Session, email: str) -> User | None:
        return db.query(User).filter_by(email=email).first()

    @staticmethod
    def register(db: Session, name: str, email: str, password: str) -> User:
        """Create the user and a zeroed streak in one transaction."""
        try:
            user = User(name=name, email=email, hashed_password=hash_password(password))
            db.add(user)
            db.flush()
            StreakService.create(db, user.id, commit=False)
            db.commit()
            db.refresh(user)
            logger.info(f"Registered user {user.id}")
            return user
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> tuple[User | None, str | None]:
        """Returns (user, None) on success or (None, reason)."""
        user = UserService.get_by_email(db, email)
        if not user:
            return None, "User not found"
        if not verify_password(password, user.hashed_password):
            return None, "Invalid password"
        return user, None
