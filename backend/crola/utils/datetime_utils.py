"""
Datetime utilities.

SQLite stores naive datetimes, so persisted timestamps are naive UTC.
"""

from datetime import datetime, timezone

UTC = timezone.utc


def now_utc() -> datetime:
    """Get current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def utcnow_naive() -> datetime:
    """
    Get current UTC datetime without tzinfo.

    Replaces datetime.utcnow() which is deprecated in Python 3.12+.
    """
    return now_utc().replace(tzinfo=None)
