"""Calendar-day helpers; every streak comparison goes through these."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional


def as_day(value: date | datetime) -> date:
    """Return the calendar day of ``value``, discarding any time-of-day."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def same_day(first: Optional[date | datetime], second: Optional[date | datetime]) -> bool:
    """Calendar-day equality; ``None`` never matches anything."""

    if first is None or second is None:
        return False
    return as_day(first) == as_day(second)


def iso_week_number(value: date | datetime) -> int:
    """ISO-8601 week number (weeks start Monday, week 1 holds January 4th)."""

    return as_day(value).isocalendar()[1]


def trailing_days(today: date, days: int) -> list[date]:
    """Return the ``days`` calendar days ending at ``today``, oldest first."""

    if days < 1:
        raise ValueError("days must be positive")
    start = as_day(today) - timedelta(days=days - 1)
    return [start + timedelta(days=offset) for offset in range(days)]


__all__ = ["as_day", "iso_week_number", "same_day", "trailing_days"]
