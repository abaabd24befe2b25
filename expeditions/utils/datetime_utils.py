"""
Datetime utilities.

Provides timezone-aware datetime functions.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone info.

    Returns:
        Current datetime in UTC with timezone awareness
    """
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """
    Make a datetime timezone-aware in UTC.

    Naive values are assumed to already be UTC (some drivers drop tzinfo
    on read).

    Args:
        value: Datetime to normalize

    Returns:
        Datetime in UTC
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def start_of_day(value: datetime) -> datetime:
    """Midnight UTC of the day ``value`` falls on."""
    return ensure_utc(value).replace(hour=0, minute=0, second=0, microsecond=0)


def to_timestamp(value: datetime) -> int:
    """Unix timestamp (seconds) of a datetime."""
    return int(ensure_utc(value).timestamp())


def to_milliseconds(value: datetime | None) -> int:
    """
    Unix timestamp in milliseconds, ``0`` for missing values.

    Used for the JSON representation of visit dates.
    """
    if value is None:
        return 0
    return int(ensure_utc(value).timestamp() * 1000)
