"""
Store-local time policy.

Every timestamp is converted to store-local wall-clock time before it is
bucketed by day or hour. Aware timestamps are converted to the configured
store time zone (system local time when none is configured); naive
timestamps are taken as already local. The result is always naive so that
local values compare with each other directly.
"""
from datetime import date, datetime, time
from typing import Optional, Union
from zoneinfo import ZoneInfo

from tilltrack.core.config import settings


def store_zone() -> Optional[ZoneInfo]:
    """Configured store time zone, or None for system local time."""
    if settings.store_timezone:
        return ZoneInfo(settings.store_timezone)
    return None


def now() -> datetime:
    """Current aware store-local time, used to stamp new records."""
    zone = store_zone()
    if zone is None:
        return datetime.now().astimezone()
    return datetime.now(zone)


def to_local(value: datetime) -> datetime:
    """Convert a timestamp to naive store-local wall-clock time."""
    if value.tzinfo is None:
        return value
    return value.astimezone(store_zone()).replace(tzinfo=None)


def local_reference(value: Union[date, datetime, None] = None) -> datetime:
    """Normalize an analytics reference point to naive local time.

    A bare date refers to the end of that day.
    """
    if value is None:
        return to_local(now())
    if isinstance(value, datetime):
        return to_local(value)
    return datetime.combine(value, time.max)
