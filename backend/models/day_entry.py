import json
import logging
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, Text, Date, DateTime, ForeignKey, UniqueConstraint
from database import Base

logger = logging.getLogger(__name__)

# Columns holding JSON arrays of issue tags
TAG_FIELDS = (
    "sleep_issues",
    "dehydration_symptoms",
    "mood_related",
    "activity_issues",
    "negative_factors",
)


def decode_tags(raw: str | None, field: str = "tags") -> list:
    """Decode a stored JSON tag list. Unreadable values are logged and read as empty."""
    if not raw:
        return []
    try:
        tags = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.error(f"Error parsing {field}: {e}")
        return []
    if not isinstance(tags, list):
        logger.error(f"Error parsing {field}: expected a list, got {type(tags).__name__}")
        return []
    return tags


def encode_tags(tags: list | None) -> str | None:
    return json.dumps(tags) if tags is not None else None


class DayEntry(Base):
    __tablename__ = "day_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    entry_date = Column(Date, nullable=False)
    sleep_hours = Column(Float, nullable=True)
    sleep_quality = Column(String(50), nullable=True)  # slept-well / poor-sleep
    water_intake = Column(String(50), nullable=True)  # enough / too-little
    mood = Column(Integer, nullable=True)  # 1-10
    activity_level = Column(Integer, nullable=True)  # 1-10
    notes = Column(Text, nullable=True)
    sleep_issues = Column(Text, nullable=True)  # JSON array of strings
    dehydration_symptoms = Column(Text, nullable=True)  # JSON array of strings
    mood_related = Column(Text, nullable=True)  # JSON array of strings
    activity_issues = Column(Text, nullable=True)  # JSON array of strings
    negative_factors = Column(Text, nullable=True)  # JSON array of strings
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("user_id", "entry_date", name="uq_dayentry_user_date"),
    )

    def metrics(self) -> dict:
        """Plain dict with decoded tag lists, as consumed by the health score calculator."""
        data = {
            "entry_date": self.entry_date,
            "sleep_hours": self.sleep_hours,
            "sleep_quality": self.sleep_quality,
            "water_intake": self.water_intake,
            "mood": self.mood,
            "activity_level": self.activity_level,
        }
        for field in TAG_FIELDS:
            data[field] = decode_tags(getattr(self, field), field)
        return data

    def to_dict(self) -> dict:
        return {
            "sleepHours": self.sleep_hours,
            "sleepQuality": self.sleep_quality,
            "waterIntake": self.water_intake,
            "mood": self.mood,
            "activityLevel": self.activity_level,
            "notes": self.notes,
            "sleepIssues": decode_tags(self.sleep_issues, "sleep_issues"),
            "dehydrationSymptoms": decode_tags(self.dehydration_symptoms, "dehydration_symptoms"),
            "moodRelated": decode_tags(self.mood_related, "mood_related"),
            "activityIssues": decode_tags(self.activity_issues, "activity_issues"),
            "negativeFactors": decode_tags(self.negative_factors, "negative_factors"),
        }
