from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...schedules.model import ResolvedWorkingDay
from ..model import PunctualityResult


class PunctualityStrategy(ABC):
    """Strategy Pattern: encapsulate how an arrival or departure is judged."""

    @abstractmethod
    def evaluate(self, *, actual: datetime, day: ResolvedWorkingDay, grace_minutes: int) -> PunctualityResult:
        raise NotImplementedError
