"""
day_entry_service.py — Daily wellness entries
One entry per user and calendar date; saving again overwrites the whole day.
"""

import logging

from sqlalchemy.orm import Session

from models.day_entry import DayEntry, TAG_FIELDS, encode_tags

logger = logging.getLogger(__name__)

SCALAR_FIELDS = (
    "sleep_hours",
    "sleep_quality",
    "water_intake",
    "mood",
    "activity_level",
    "notes",
)


class DayEntryService:
    @staticmethod
    def upsert(db: Session, user_id: int, entry_date, data: dict) -> DayEntry:
        """Insert or replace the entry for (user, date). Missing fields are stored as NULL."""
        try:
            entry = db.query(DayEntry).filter_by(user_id=user_id, entry_date=entry_date).first()
            if not entry:
                entry = DayEntry(user_id=user_id, entry_date=entry_date)
                db.add(entry)

            for field in SCALAR_FIELDS:
                value = data.get(field)
                # Blank strings count as not recorded; numeric 0 is kept
                if isinstance(value, str) and not value.strip():
                    value = None
                setattr(entry, field, value)
            for field in TAG_FIELDS:
                setattr(entry, field, encode_tags(data.get(field)))

            db.commit()
            db.refresh(entry)
            return entry
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def get_by_date(db: Session, user_id: int, entry_date) -> DayEntry | None:
        return db.query(DayEntry).filter_by(user_id=user_id, entry_date=entry_date).first()
