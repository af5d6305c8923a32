"""Duration strings <-> minute counts.

Historical attendance rows carry durations in whatever format the client of
the day produced ("8h 30m", "08:30:00", "8.5", "45 minutes", ...). Parsing is
deliberately lenient: anything unreadable counts as zero minutes.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from ..common.rounding import round_half_up, round_to
from ..common.validators import require_non_negative
from ..core.constants import MAX_UNITLESS_HOURS, MINUTES_PER_HOUR, PRECISION_HOURS

logger = logging.getLogger(__name__)

_CLOCK = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")
_HOURS_AND_MINUTES = re.compile(
    r"(\d+(?:\.\d+)?)\s*h(?:(?:ou)?rs?)?\s*,?\s*(\d+(?:\.\d+)?)\s*m(?:in(?:ute)?s?)?",
    re.IGNORECASE,
)
_HOURS_ONLY = re.compile(r"(\d+(?:\.\d+)?)\s*h(?:(?:ou)?rs?)?$", re.IGNORECASE)
_MINUTES_ONLY = re.compile(r"(\d+(?:\.\d+)?)\s*m(?:in(?:ute)?s?)?$", re.IGNORECASE)
_DECIMAL_HOURS = re.compile(r"^(\d+(?:\.\d+)?)$")
_ANY_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def format_duration(minutes: int) -> str:
    """Render a minute count as "{hours}h {minutes}m"."""
    minutes = int(require_non_negative(minutes, "minutes"))
    return f"{minutes // MINUTES_PER_HOUR}h {minutes % MINUTES_PER_HOUR}m"


def parse_duration(text: Optional[str]) -> int:
    if not text or not isinstance(text, str):
        return 0

    trimmed = text.strip()
    if trimmed in ("", "0"):
        return 0

    m = _CLOCK.match(trimmed)
    if m:
        hours, minutes = int(m.group(1)), int(m.group(2))
        seconds = int(m.group(3)) if m.group(3) else 0
        return hours * MINUTES_PER_HOUR + minutes + round_half_up(seconds / 60)

    m = _HOURS_AND_MINUTES.search(trimmed)
    if m:
        return round_half_up(float(m.group(1)) * MINUTES_PER_HOUR + float(m.group(2)))

    m = _HOURS_ONLY.search(trimmed)
    if m:
        return round_half_up(float(m.group(1)) * MINUTES_PER_HOUR)

    m = _MINUTES_ONLY.search(trimmed)
    if m:
        return round_half_up(float(m.group(1)))

    m = _DECIMAL_HOURS.match(trimmed)
    if m:
        return round_half_up(float(m.group(1)) * MINUTES_PER_HOUR)

    numbers = _ANY_NUMBER.findall(trimmed)
    if numbers:
        first = float(numbers[0])
        if first <= MAX_UNITLESS_HOURS:
            return round_half_up(first * MINUTES_PER_HOUR)
        return round_half_up(first)

    logger.warning("Unable to parse duration string: %r", text)
    return 0


def minutes_to_hours(minutes: float, precision: int = PRECISION_HOURS) -> float:
    return round_to(minutes / MINUTES_PER_HOUR, precision)
