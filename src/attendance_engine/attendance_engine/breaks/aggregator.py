from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import BreakMode
from ..core.exceptions import ValidationError
from ..durations.formatter import parse_duration
from .model import BreakInterval


def total_break_minutes(
    intervals: Optional[Sequence[BreakInterval]],
    legacy_duration: Optional[str] = None,
    *,
    mode: BreakMode = BreakMode.COMPLETED_ONLY,
    now: Optional[datetime] = None,
) -> int:
    """Reduce a shift's breaks to whole minutes.

    Structured intervals win over the legacy free-text total. Overlapping
    intervals are summed as recorded. A running break only counts in
    AS_OF_NOW mode, which needs `now`.
    """

    if mode is BreakMode.AS_OF_NOW and now is None:
        raise ValidationError("now is required to count breaks as of now")

    if intervals:
        total = 0
        for interval in intervals:
            if interval.end_time is not None:
                total += interval.duration_minutes
            elif mode is BreakMode.AS_OF_NOW:
                total += interval.minutes_as_of(now)
        return total

    if legacy_duration:
        return max(0, parse_duration(legacy_duration))

    return 0
