"""
streak_service.py — Daily entry streaks
Consecutive-day counter: increments on the next calendar day, resets after a gap,
and never lowers the user's longest streak.
"""

import logging
from datetime import date, datetime

from sqlalchemy.orm import Session

from models.streak import Streak

logger = logging.getLogger(__name__)


def _as_date(value) -> date | None:
    """Truncate datetimes to their calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def update_streak(prior: dict | None, new_date) -> dict:
    """
    Apply one activity date to a streak state.

    `prior` is {"current_streak", "last_entry_date", "longest_streak"} or None for a
    user without a streak yet. Returns the new state plus `already_recorded_today`.
    A date before the last recorded one resets the streak to 1, same as a gap.
    """
    prior = prior or {}
    current = prior.get("current_streak") or 0
    longest = prior.get("longest_streak") or 0
    last_date = _as_date(prior.get("last_entry_date"))
    new_date = _as_date(new_date)

    if last_date is None:
        current = 1
    else:
        diff_days = (new_date - last_date).days
        if diff_days == 0:
            return {
                "current_streak": current,
                "last_entry_date": last_date,
                "longest_streak": longest,
                "already_recorded_today": True,
            }
        elif diff_days == 1:
            current += 1
        else:
            if diff_days < 0:
                logger.warning(f"Backdated streak update: {new_date} is before {last_date}, resetting")
            current = 1

    return {
        "current_streak": current,
        "last_entry_date": new_date,
        "longest_streak": max(longest, current),
        "already_recorded_today": False,
    }


class StreakService:
    @staticmethod
    def create(db: Session, user_id: int, commit: bool = True) -> Streak:
        """Zeroed streak row for a user."""
        streak = Streak(user_id=user_id, current_streak=0, last_entry_date=None, longest_streak=0)
        db.add(streak)
        if commit:
            db.commit()
            db.refresh(streak)
        return streak

    @staticmethod
    def get_or_create(db: Session, user_id: int) -> Streak:
        try:
            streak = db.query(Streak).filter_by(user_id=user_id).first()
            if streak:
                return streak
            logger.info(f"No streak row for user {user_id}, creating one")
            return StreakService.create(db, user_id)
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def record(db: Session, user_id: int, entry_date) -> dict:
        """Run the streak engine for `entry_date` and persist the result."""
        try:
            # Row lock serializes concurrent updates for the same user
            streak = db.query(Streak).filter_by(user_id=user_id).with_for_update().first()
            result = update_streak(streak.state() if streak else None, entry_date)
            if result["already_recorded_today"]:
                db.rollback()
                return result

            if not streak:
                streak = Streak(user_id=user_id)
                db.add(streak)
            streak.current_streak = result["current_streak"]
            streak.last_entry_date = result["last_entry_date"]
            streak.longest_streak = result["longest_streak"]
            db.commit()
            return result
        except Exception:
            db.rollback()
            raise
