from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..attendance.model import ShiftRecord
from ..breaks.aggregator import total_break_minutes
from ..common.datetime_utils import whole_minutes_between
from ..common.rounding import round_to
from ..core.constants import MINUTES_PER_HOUR, NOT_AVAILABLE, PRECISION_HOURS
from .circular import average_time_of_day


@dataclass(frozen=True)
class AverageTimes:
    average_check_in: str
    average_check_out: str
    average_shift_hours: float
    average_break_hours: float


def _mean_hours(minutes: Sequence[int]) -> float:
    if not minutes:
        return 0.0
    return round_to(sum(minutes) / len(minutes) / MINUTES_PER_HOUR, PRECISION_HOURS)


def average_times(records: Sequence[ShiftRecord]) -> AverageTimes:
    """Average check-in/out clock times and shift/break lengths over records.

    Check-out and shift length only consider completed shifts; breaks are
    averaged over every record (completed breaks only).
    """

    if not records:
        return AverageTimes(NOT_AVAILABLE, NOT_AVAILABLE, 0.0, 0.0)

    completed = [r for r in records if r.check_out is not None]
    shift_minutes = [max(0, whole_minutes_between(r.check_in, r.check_out)) for r in completed]
    break_minutes = [total_break_minutes(r.break_intervals, r.legacy_total_break_duration) for r in records]

    return AverageTimes(
        average_check_in=average_time_of_day(r.check_in for r in records),
        average_check_out=average_time_of_day(r.check_out for r in completed),
        average_shift_hours=_mean_hours(shift_minutes),
        average_break_hours=_mean_hours(break_minutes),
    )
