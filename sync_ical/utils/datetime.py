"""UTC datetime utilities."""

from datetime import date, datetime, time, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-aware datetime.

    This function should be used instead of datetime.now() or datetime.utcnow()
    to ensure all timestamps are timezone-aware and stored in UTC.

    Returns:
        Timezone-aware datetime in UTC

    Example:
        >>> now = utc_now()
        >>> now.tzinfo is not None
        True
    """
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """
    Convert a datetime to timezone-aware UTC.

    Naive values are assumed to already be in UTC (floating iCalendar times and
    timestamps read back from SQLite both arrive without tzinfo).

    Example:
        >>> as_utc(datetime(2026, 3, 1, 14, 0)).isoformat()
        '2026-03-01T14:00:00+00:00'
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_day_utc(value: date) -> datetime:
    """Midnight UTC at the start of the given calendar date."""
    return datetime.combine(value, time.min, tzinfo=timezone.utc)
