from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PunctualityKind, PunctualityTier


@dataclass(frozen=True)
class PunctualityResult:
    kind: PunctualityKind
    tier: PunctualityTier = PunctualityTier.ON_TIME
    minutes: int = 0
    is_late: bool = False
    is_early: bool = False
    grace_minutes: int = 0
