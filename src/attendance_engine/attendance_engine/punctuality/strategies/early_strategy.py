from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minutes_of_day, time_to_minutes
from ...core.enums import PunctualityKind, PunctualityTier
from ...schedules.model import ResolvedWorkingDay
from ..model import PunctualityResult
from .base import PunctualityStrategy


class DepartureStrategy(PunctualityStrategy):
    """Early check-out: any minute before the expected end counts."""

    def evaluate(self, *, actual: datetime, day: ResolvedWorkingDay, grace_minutes: int) -> PunctualityResult:
        minutes = max(0, time_to_minutes(day.expected_end) - minutes_of_day(actual))
        return PunctualityResult(
            kind=PunctualityKind.DEPARTURE,
            tier=PunctualityTier.EARLY if minutes > 0 else PunctualityTier.ON_TIME,
            minutes=minutes,
            is_early=minutes > 0,
            grace_minutes=grace_minutes,
        )
