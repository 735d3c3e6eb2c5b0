"""Datetime utility functions for timezone handling."""
from datetime import date, datetime, timedelta, UTC
from typing import Optional


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is timezone-aware in UTC.

    Datetimes read back from SQLite are timezone-naive but are stored as UTC.

    Example:
        >>> naive_dt = datetime(2025, 1, 1, 12, 0, 0)
        >>> ensure_utc(naive_dt).tzinfo == UTC
        True

        >>> ensure_utc(None) is None
        True
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def utc_today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(UTC).date()


def trailing_days(window_days: int, end: date) -> list[date]:
    """The ``window_days`` calendar dates ending on ``end`` (inclusive), oldest first."""
    return [end - timedelta(days=offset) for offset in range(window_days - 1, -1, -1)]


def minutes_between(start: datetime, end: datetime) -> float:
    """Elapsed minutes from ``start`` to ``end``; naive values count as UTC."""
    return (ensure_utc(end) - ensure_utc(start)).total_seconds() / 60
