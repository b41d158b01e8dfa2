"""Time utilities for UTC timestamps."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Coerce a datetime to timezone-aware UTC.

    SQLite drops tzinfo on round-trip, so naive values read back from the
    database are assumed to already be UTC.

    Args:
        dt: Naive or aware datetime

    Returns:
        Aware datetime in UTC
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_utc_z(dt: datetime) -> str:
    """
    Convert datetime to ISO 8601 UTC string with Z suffix.

    Raises:
        ValueError: If datetime is naive (not timezone-aware)

    Example:
        >>> from datetime import datetime, timezone
        >>> to_utc_z(datetime(2025, 12, 23, tzinfo=timezone.utc))
        '2025-12-23T00:00:00Z'
    """
    if dt.tzinfo is None:
        raise ValueError(
            f"Naive datetime not allowed. Got {dt}. "
            "Use datetime.now(timezone.utc) or dt.replace(tzinfo=timezone.utc)"
        )
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
