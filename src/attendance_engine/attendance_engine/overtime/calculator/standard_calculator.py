from __future__ import annotations

from typing import Optional

from ...core.constants import DEFAULT_STANDARD_MINUTES
from ...schedules.model import ResolvedWorkingDay
from ..model import OvertimeResult
from .base import OvertimeCalculator


class StandardOvertimeCalculator(OvertimeCalculator):
    """Standard rule: everything past the day's expected minutes, not below 0.

    An unresolved day (None) falls back to `standard_minutes`. A resolved day
    off has 0 expected minutes, so all of its work is overtime.
    """

    def __init__(self, standard_minutes: int = DEFAULT_STANDARD_MINUTES):
        self._standard_minutes = int(standard_minutes)

    def overtime(self, net_minutes: int, day: Optional[ResolvedWorkingDay]) -> OvertimeResult:
        standard = day.expected_minutes if day is not None else self._standard_minutes
        net = max(0, int(net_minutes))
        extra = max(0, net - standard)
        return OvertimeResult(
            is_overtime=extra > 0,
            overtime_minutes=extra,
            standard_minutes=standard,
            capped_minutes=min(net, standard),
            net_minutes=net,
        )


def overtime(net_minutes: int, day: Optional[ResolvedWorkingDay]) -> OvertimeResult:
    return StandardOvertimeCalculator().overtime(net_minutes, day)
