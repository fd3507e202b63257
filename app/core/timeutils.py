# app/core/timeutils.py
from datetime import date, datetime, timedelta, timezone


def utcnow() -> datetime:
    """Naive UTC now, matching how timestamps are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def week_start(day: date) -> date:
    # Sunday-based weeks: day_of_week 0 == Sunday
    return day - timedelta(days=(day.weekday() + 1) % 7)
