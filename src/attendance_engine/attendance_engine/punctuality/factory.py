from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.constants import DEFAULT_GRACE_MINUTES
from ..core.enums import PunctualityKind
from ..schedules.model import ResolvedWorkingDay
from .model import PunctualityResult
from .strategies.base import PunctualityStrategy
from .strategies.early_strategy import DepartureStrategy
from .strategies.late_strategy import ArrivalStrategy
from .strategies.normal_strategy import OnTimeStrategy


@dataclass
class PunctualityStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on the resolved day."""

    def for_kind(self, *, kind: PunctualityKind, day: ResolvedWorkingDay) -> PunctualityStrategy:
        if not day.is_working_day:
            return OnTimeStrategy(kind)

        if kind is PunctualityKind.ARRIVAL:
            if day.expected_start is None:
                return OnTimeStrategy(kind)
            return ArrivalStrategy()

        if day.expected_end is None:
            return OnTimeStrategy(kind)
        return DepartureStrategy()


_FACTORY = PunctualityStrategyFactory()


def evaluate(
    actual: datetime,
    day: ResolvedWorkingDay,
    grace_minutes: int = DEFAULT_GRACE_MINUTES,
    kind: PunctualityKind = PunctualityKind.ARRIVAL,
) -> PunctualityResult:
    strategy = _FACTORY.for_kind(kind=kind, day=day)
    return strategy.evaluate(actual=actual, day=day, grace_minutes=int(grace_minutes))
