"""
Datetime helpers.

All timestamps are produced and returned as timezone-aware UTC. SQLite drops
the offset on storage, so values read back are normalized with ensure_utc().
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Get current UTC time as timezone-aware datetime.

    Returns:
        datetime: Current time in UTC with timezone info
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure datetime is UTC timezone-aware.

    Naive values are assumed to already be UTC; aware values are converted.

    Args:
        dt: Datetime object (naive or aware) or None

    Returns:
        datetime | None: UTC timezone-aware datetime or None

    Example:
        >>> ensure_utc(datetime(2026, 10, 17, 9, 30)).tzinfo
        datetime.timezone.utc
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def to_iso_utc(dt: datetime | None) -> str | None:
    """
    Convert datetime to ISO format with 'Z' suffix.

    Args:
        dt: Datetime object or None

    Returns:
        str | None: ISO 8601 string such as "2026-10-17T09:30:00.123456Z"
    """
    if dt is None:
        return None

    return ensure_utc(dt).isoformat().replace('+00:00', 'Z')
