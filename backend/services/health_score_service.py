"""
health_score_service.py — Weekly Health Score
Scores sleep, water, activity and mood for each day of the trailing window,
averages them into a weighted 0..100 score and annotates simple trends.
"""

import logging
import math
from datetime import datetime, timezone, timedelta
from enum import Enum

from sqlalchemy.orm import Session

from config import HEALTH_SCORE_WINDOW_DAYS
from models.day_entry import DayEntry

logger = logging.getLogger(__name__)


class Category(str, Enum):
    SLEEP = "Sleep"
    WATER = "Water"
    ACTIVITY = "Activity"
    MOOD = "Mood"


class Band(Enum):
    EXCELLENT = 80
    GOOD = 60
    AVERAGE = 40
    NEEDS_WORK = 0

    @classmethod
    def for_score(cls, score: int) -> "Band":
        for band in (cls.EXCELLENT, cls.GOOD, cls.AVERAGE):
            if score >= band.value:
                return band
        return cls.NEEDS_WORK


# Percent of the overall score
WEIGHTS = {
    Category.SLEEP: 40,
    Category.WATER: 20,
    Category.ACTIVITY: 20,
    Category.MOOD: 20,
}

DESCRIPTIONS = {
    (Category.SLEEP, Band.EXCELLENT): "Excellent sleep patterns",
    (Category.SLEEP, Band.GOOD): "Good sleep habits",
    (Category.SLEEP, Band.AVERAGE): "Average sleep quality",
    (Category.SLEEP, Band.NEEDS_WORK): "Needs improvement",
    (Category.WATER, Band.EXCELLENT): "Perfect hydration",
    (Category.WATER, Band.GOOD): "Adequate hydration",
    (Category.WATER, Band.AVERAGE): "Moderate hydration",
    (Category.WATER, Band.NEEDS_WORK): "Hydration needs attention",
    (Category.ACTIVITY, Band.EXCELLENT): "Great activity levels",
    (Category.ACTIVITY, Band.GOOD): "Good activity levels",
    (Category.ACTIVITY, Band.AVERAGE): "Moderate activity",
    (Category.ACTIVITY, Band.NEEDS_WORK): "Activity needs increase",
    (Category.MOOD, Band.EXCELLENT): "Excellent mood balance",
    (Category.MOOD, Band.GOOD): "Good mood stability",
    (Category.MOOD, Band.AVERAGE): "Average mood levels",
    (Category.MOOD, Band.NEEDS_WORK): "Mood needs attention",
}

NO_DATA = "No data recorded"

GOOD_DAY_SCORE = 60
BAD_DAY_SCORE = 40


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(score: float, low: int = 0, high: int = 100) -> float:
    return max(low, min(high, score))


def describe(category: Category, score: int, counted: int) -> str:
    if counted == 0:
        return NO_DATA
    return DESCRIPTIONS[(category, Band.for_score(score))]


# ── Per-entry scoring ─────────────────────────────────────────────
def sleep_score(entry: dict) -> float:
    hours = entry["sleep_hours"]
    score = 0
    if 7 <= hours <= 9:
        score += 60  # ideal
    elif 6 <= hours < 7:
        score += 40
    elif 9 < hours <= 10:
        score += 40
    elif 5 <= hours < 6:
        score += 20
    elif 10 < hours <= 11:
        score += 20

    quality = entry.get("sleep_quality")
    if quality == "slept-well":
        score += 40
    elif quality == "poor-sleep":
        score += 10

    score -= min(10 * len(entry.get("sleep_issues") or []), 30)
    return clamp(score)


def water_score(entry: dict) -> float:
    intake = entry["water_intake"]
    score = 0
    if intake == "enough":
        score += 100
    elif intake == "too-little":
        score += 30

    score -= min(15 * len(entry.get("dehydration_symptoms") or []), 40)
    return clamp(score)


def activity_score(entry: dict) -> float:
    level = entry["activity_level"]
    score = 0
    if 5 <= level <= 7:
        score += 100
    elif 3 <= level < 5:
        score += 70
    elif 7 < level <= 9:
        score += 80
    elif 1 <= level < 3:
        score += 30
    elif level == 10:
        score += 60

    score -= min(8 * len(entry.get("activity_issues") or []), 40)
    return clamp(score)


def mood_score(entry: dict) -> float:
    mood = entry["mood"]
    score = 100
    if mood <= 3:
        score -= 40
    elif mood <= 5:
        score -= 20
    elif mood <= 7:
        score -= 10

    score -= min(12 * len(entry.get("mood_related") or []), 60)
    return clamp(score)


# ── Trends ────────────────────────────────────────────────────────
def _trend(emoji: str, text: str, polarity: str) -> dict:
    return {"emoji": emoji, "text": text, "type": polarity}


def _older_average(entries: list[dict]) -> float | None:
    """Mood and sleep-hours blend over the oldest 30% of the window."""
    older = entries[math.floor(len(entries) * 0.7):]
    total = 0.0
    count = 0
    for entry in older:
        if entry.get("mood") is not None:
            total += entry["mood"] * 0.5
            count += 1
        if entry.get("sleep_hours") is not None:
            total += (50 if entry["sleep_hours"] >= 7 else 25) * 0.5
            count += 1
    if count == 0:
        return None
    return total / count


def detect_trends(entries: list[dict], good_days: int, bad_days: int, sleep_avg: int, mood_avg: int) -> list[dict]:
    trends = []
    if len(entries) < 3:
        return trends

    if good_days > bad_days and good_days >= 3:
        trends.append(_trend("📈", "Mostly good days this week!", "positive"))
    elif bad_days > good_days and bad_days >= 3:
        trends.append(_trend("📉", "Consider taking more rest days", "negative"))

    if len(entries) >= 5:
        consistent = all(
            e.get("sleep_hours") is not None
            and e.get("water_intake") is not None
            and e.get("mood") is not None
            for e in entries[:5]
        )
        if consistent:
            trends.append(_trend("⭐", "Great consistency in tracking!", "positive"))

    recent_avg = (sleep_avg + mood_avg) / 2
    older_avg = _older_average(entries)
    if older_avg is not None and recent_avg > older_avg + 10:
        trends.append(_trend("🚀", "Great improvement this week!", "positive"))

    return trends


def compute_health_score(entries: list[dict]) -> dict:
    """
    Score a window of day entries, most recent first.

    Each entry is a dict as produced by DayEntry.metrics(). A category only counts
    the entries where its field was recorded. Returns
    {"overall_score", "categories", "trends"}.
    """
    if not entries:
        return {"overall_score": 0, "categories": [], "trends": []}

    totals = {c: 0.0 for c in Category}
    counted = {c: 0 for c in Category}
    good_days = 0
    bad_days = 0

    for entry in entries:
        if entry.get("sleep_hours") is not None:
            totals[Category.SLEEP] += sleep_score(entry)
            counted[Category.SLEEP] += 1

        if entry.get("water_intake"):
            totals[Category.WATER] += water_score(entry)
            counted[Category.WATER] += 1

        if entry.get("activity_level") is not None:
            totals[Category.ACTIVITY] += activity_score(entry)
            counted[Category.ACTIVITY] += 1

        if entry.get("mood") is not None:
            score = mood_score(entry)
            totals[Category.MOOD] += score
            counted[Category.MOOD] += 1
            if score >= GOOD_DAY_SCORE:
                good_days += 1
            elif score < BAD_DAY_SCORE:
                bad_days += 1

    averages = {
        c: round_half_up(totals[c] / counted[c]) if counted[c] else 0
        for c in Category
    }
    overall = round_half_up(sum(averages[c] * WEIGHTS[c] / 100 for c in Category))

    categories = [
        {
            "name": c.value,
            "score": averages[c],
            "weight": WEIGHTS[c],
            "description": describe(c, averages[c], counted[c]),
        }
        for c in Category
    ]

    trends = detect_trends(entries, good_days, bad_days, averages[Category.SLEEP], averages[Category.MOOD])
    return {"overall_score": overall, "categories": categories, "trends": trends}


class HealthScoreService:
    @staticmethod
    def get_window(db: Session, user_id: int, today=None, days: int = HEALTH_SCORE_WINDOW_DAYS) -> list[DayEntry]:
        """Entries dated on or after `today - days`, most recent first."""
        d = today or datetime.now(timezone.utc).date()
        start_date = d - timedelta(days=days)
        return db.query(DayEntry).filter(
            DayEntry.user_id == user_id,
            DayEntry.entry_date >= start_date,
        ).order_by(DayEntry.entry_date.desc()).all()

    @staticmethod
    def calculate(db: Session, user_id: int, today=None) -> dict:
        entries = [e.metrics() for e in HealthScoreService.get_window(db, user_id, today)]
        result = compute_health_score(entries)
        result["entries_count"] = len(entries)
        result["days_tracked"] = min(len(entries), HEALTH_SCORE_WINDOW_DAYS)
        logger.debug(f"Health score for user {user_id}: {result['overall_score']} over {len(entries)} entries")
        return result
