"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

from datetime import date, datetime, time, timedelta, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application should be timezone-naive
    and assumed to be UTC. This ensures consistent behavior across
    the codebase and simplifies database storage.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_day(value: date | datetime) -> datetime:
    """Floor a date or datetime to 00:00:00.000000 of the same day."""
    return datetime.combine(_as_date(value), time.min)


def end_of_day(value: date | datetime) -> datetime:
    """Ceil a date or datetime to 23:59:59.999999 of the same day."""
    return datetime.combine(_as_date(value), time.max)


def days_between(earlier: datetime, later: datetime) -> int:
    """Whole days elapsed from earlier to later (floored)."""
    return (later - earlier) // timedelta(days=1)


def elapsed_ms(started: datetime) -> int:
    """Milliseconds elapsed since started (UTC, naive)."""
    return int((utc_now() - started).total_seconds() * 1000)
