from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minutes_of_day, time_to_minutes
from ...core.constants import EXTREMELY_LATE_MINUTES, VERY_LATE_MINUTES
from ...core.enums import PunctualityKind, PunctualityTier
from ...schedules.model import ResolvedWorkingDay
from ..model import PunctualityResult
from .base import PunctualityStrategy


def lateness_tier(minutes: int) -> PunctualityTier:
    if minutes <= 0:
        return PunctualityTier.ON_TIME
    if minutes < VERY_LATE_MINUTES:
        return PunctualityTier.LATE
    if minutes < EXTREMELY_LATE_MINUTES:
        return PunctualityTier.VERY_LATE
    return PunctualityTier.EXTREMELY_LATE


class ArrivalStrategy(PunctualityStrategy):
    """Late check-in: minutes counted past start + grace."""

    def evaluate(self, *, actual: datetime, day: ResolvedWorkingDay, grace_minutes: int) -> PunctualityResult:
        late_by = minutes_of_day(actual) - time_to_minutes(day.expected_start) - grace_minutes
        minutes = max(0, late_by)
        return PunctualityResult(
            kind=PunctualityKind.ARRIVAL,
            tier=lateness_tier(minutes),
            minutes=minutes,
            is_late=minutes > 0,
            grace_minutes=grace_minutes,
        )
