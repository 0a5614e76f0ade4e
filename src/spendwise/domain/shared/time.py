"""Time utilities for the domain layer."""

import math
from datetime import datetime, timezone

SECONDS_PER_DAY = 24 * 60 * 60


def utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def ensure_tz_aware(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (UTC if naive)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def days_until(deadline: datetime, now: datetime) -> int:
    """Whole days left until ``deadline``, rounded up and never negative."""
    remaining = (ensure_tz_aware(deadline) - ensure_tz_aware(now)).total_seconds()
    return max(0, math.ceil(remaining / SECONDS_PER_DAY))
