from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...schedules.model import ResolvedWorkingDay
from ..model import OvertimeResult


class OvertimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for overtime)."""

    @abstractmethod
    def overtime(self, net_minutes: int, day: Optional[ResolvedWorkingDay]) -> OvertimeResult:
        raise NotImplementedError
