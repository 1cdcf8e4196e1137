"""
Timezone-aware datetime utilities.

SQLite drops tzinfo on round trip, so every datetime read back from storage
goes through ensure_utc before it is compared with now_utc().
"""

from datetime import datetime, timezone
from typing import Optional

# UTC timezone constant
UTC = timezone.utc


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Replaces datetime.utcnow() which is deprecated in Python 3.12+.
    """
    return datetime.now(UTC)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to a naive datetime, or convert an aware one to UTC.

    Args:
        value: Datetime read from storage (naive values are assumed UTC)

    Returns:
        Timezone-aware datetime in UTC, or None
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
