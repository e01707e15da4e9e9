"""
DateTime helpers for persisted timestamps.

All timestamps written to MongoDB are timezone-aware UTC. PyMongo/Motor hand
naive datetimes back (representing UTC) unless the client is tz-aware, so
values read from the store go through ensure_utc().
"""
from datetime import datetime, timezone as dt_timezone
from typing import Optional


def utc_now() -> datetime:
    """
    Get current UTC time as a timezone-aware datetime, truncated to milliseconds.

    BSON dates only keep millisecond precision, so truncating here keeps the
    value returned to clients equal to the value stored.
    """
    now = datetime.now(dt_timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime into a timezone-aware UTC datetime.

    - If dt is None -> None
    - If dt is naive -> assume it represents UTC (this matches MongoDB/PyMongo behavior)
    - If dt is aware -> convert to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt.astimezone(dt_timezone.utc)
