import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session
from typing import Optional

from auth import get_current_user
from database import get_db
from services.day_entry_service import DayEntryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/day", tags=["Day Entries"])


class DayEntryData(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    sleep_hours: Optional[float] = Field(default=None, ge=0, le=24)
    sleep_quality: Optional[str] = None
    water_intake: Optional[str] = None
    mood: Optional[int] = Field(default=None, ge=1, le=10)
    activity_level: Optional[int] = Field(default=None, ge=1, le=10)
    notes: Optional[str] = None
    sleep_issues: Optional[list[str]] = None
    dehydration_symptoms: Optional[list[str]] = None
    mood_related: Optional[list[str]] = None
    activity_issues: Optional[list[str]] = None
    negative_factors: Optional[list[str]] = None


class DaySave(BaseModel):
    date: date
    data: DayEntryData


@router.post("")
async def save_day(body: DaySave, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        DayEntryService.upsert(db, user_id, body.date, body.data.model_dump())
        return {"status": "success", "message": "Day data saved successfully"}
    except Exception:
        logger.exception("Saving day entry failed")
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/{entry_date}")
async def get_day(entry_date: date, user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    try:
        entry = DayEntryService.get_by_date(db, user_id, entry_date)
        if not entry:
            raise HTTPException(status_code=404, detail="Entry not found")
        return {"status": "success", "data": entry.to_dict()}
    except HTTPException:
        raise
    except Exception:
        logger.exception("Fetching day entry failed")
        raise HTTPException(status_code=500, detail="Server error")
