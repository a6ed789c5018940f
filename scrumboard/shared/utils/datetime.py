"""
UTC datetime utilities for consistent timezone handling.

Every timestamp on a task, scrum note or notification is timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Aggregates take this function as their default clock so tests can
    substitute a fixed one.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Deadlines and scrum note dates coming from callers go through this
    before they are compared with the clock.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def start_of_day_utc(dt: datetime) -> datetime:
    """
    Truncate a datetime to midnight (UTC) of the same calendar day.

    Args:
        dt: Naive (taken as UTC) or aware datetime

    Returns:
        UTC-aware datetime at 00:00:00.000000
    """
    aware = dt.replace(tzinfo=UTC) if dt.tzinfo is None else dt.astimezone(UTC)
    return aware.replace(hour=0, minute=0, second=0, microsecond=0)
