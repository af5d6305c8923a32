from __future__ import annotations

import logging
import math
from datetime import date, datetime, time, timedelta
from typing import Callable, Optional, Union

import pytz

from ..core.constants import MINUTES_PER_DAY, MINUTES_PER_HOUR

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

TimeLike = Union[str, time, datetime, timedelta]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so services can take it as an injectable clock.
    """
    return datetime.now()


def whole_minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes elapsed from start to end (floored, may be negative)."""
    return math.floor((end - start).total_seconds() / 60)


def minutes_of_day(value: Union[datetime, time]) -> int:
    """Minutes since local midnight, seconds ignored."""
    return value.hour * MINUTES_PER_HOUR + value.minute


def time_to_minutes(value: Optional[time]) -> Optional[int]:
    if value is None:
        return None
    return minutes_of_day(value)


def format_clock(minutes: int) -> str:
    """Render minutes since midnight as HH:MM (wrapping at 24:00)."""
    minutes = int(minutes) % MINUTES_PER_DAY
    return f"{minutes // MINUTES_PER_HOUR:02d}:{minutes % MINUTES_PER_HOUR:02d}"


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def next_midnight(value: datetime) -> datetime:
    return start_of_day(value) + timedelta(days=1)


def normalize_time(value: TimeLike) -> time:
    """Normalize a wall-clock time from the shapes stored for organization hours.

    Organization hours can arrive as:
    - datetime.time
    - datetime.datetime (timestamp columns; only the clock part matters)
    - datetime.timedelta (MySQL TIME via mysql-connector)
    - string ('08:30', '08:30:00' or an ISO timestamp)
    """

    if isinstance(value, datetime):
        return value.time().replace(tzinfo=None)

    if isinstance(value, time):
        return value.replace(tzinfo=None)

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        return time(hour=total_seconds // 3600, minute=(total_seconds % 3600) // 60, second=total_seconds % 60)

    if isinstance(value, str):
        text = value.strip()
        if "T" in text:
            return normalize_time(datetime.fromisoformat(text.replace("Z", "+00:00")))
        parts = text.split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported time value type: {type(value)!r}")


def to_organization_time(value: datetime, tz_name: Optional[str], *, fallback_tz: str = "UTC") -> datetime:
    """Convert a storage timestamp to naive wall-clock time in the organization zone.

    Naive input is treated as UTC, which is how timestamps come out of storage.
    Run this once at the boundary before handing timestamps to the engine.
    """

    try:
        zone = pytz.timezone(tz_name or fallback_tz)
    except pytz.UnknownTimeZoneError:
        logger.warning("Unknown timezone %r, falling back to %s", tz_name, fallback_tz)
        zone = pytz.timezone(fallback_tz)

    if value.tzinfo is None:
        value = pytz.UTC.localize(value)
    return value.astimezone(zone).replace(tzinfo=None)
