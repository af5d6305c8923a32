from __future__ import annotations

from datetime import datetime

from ...core.enums import PunctualityKind
from ...schedules.model import ResolvedWorkingDay
from ..model import PunctualityResult
from .base import PunctualityStrategy


class OnTimeStrategy(PunctualityStrategy):
    """No schedule boundary to compare against (day off, holiday, missing hours)."""

    def __init__(self, kind: PunctualityKind):
        self._kind = kind

    def evaluate(self, *, actual: datetime, day: ResolvedWorkingDay, grace_minutes: int) -> PunctualityResult:
        return PunctualityResult(kind=self._kind, grace_minutes=grace_minutes)
