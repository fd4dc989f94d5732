import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db
from services.streak_service import StreakService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/streak", tags=["Streak"])


class StreakUpdate(BaseModel):
    date: date


def _iso(d: date | None) -> str | None:
    return d.isoformat() if d else None


@router.get("")
async def get_streak(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        streak = StreakService.get_or_create(db, user_id)
        return {
            "currentStreak": streak.current_streak,
            "lastEntryDate": _iso(streak.last_entry_date),
            "longestStreak": streak.longest_streak,
        }
    except Exception:
        logger.exception("Fetching streak failed")
        raise HTTPException(status_code=500, detail="Server error")


@router.post("/update")
async def update_streak(body: StreakUpdate, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """Record activity on `date` and return the resulting streak."""
    try:
        result = StreakService.record(db, user_id, body.date)
        if result["already_recorded_today"]:
            return {
                "message": "Today already recorded",
                "currentStreak": result["current_streak"],
                "lastEntryDate": _iso(result["last_entry_date"]),
                "longestStreak": result["longest_streak"],
                "alreadyRecordedToday": True,
            }
        return {
            "message": "Streak updated successfully",
            "currentStreak": result["current_streak"],
            "lastEntryDate": _iso(result["last_entry_date"]),
            "longestStreak": result["longest_streak"],
            "alreadyRecordedToday": False,
        }
    except Exception:
        logger.exception("Updating streak failed")
        raise HTTPException(status_code=500, detail="Server error")
