from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from ..breaks.model import BreakInterval
from ..punctuality.model import PunctualityResult


@dataclass(frozen=True)
class ShiftRecord:
    """One attendance session, timestamps already in organization-local time."""

    check_in: datetime
    check_out: Optional[datetime] = None
    break_intervals: Tuple[BreakInterval, ...] = ()
    legacy_total_break_duration: Optional[str] = None
    organization_id: Optional[int] = None
    record_id: Optional[int] = None
    user_id: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.check_out is None


@dataclass(frozen=True)
class WorkSessionResult:
    gross_minutes: int
    break_minutes: int
    net_minutes: int
    net_hours: float


@dataclass(frozen=True)
class Segment:
    """One calendar day's slice of a (possibly multi-day) shift."""

    date: date
    start: datetime
    end: datetime
    work_minutes: int
    break_minutes: int
    net_work_minutes: int


@dataclass(frozen=True)
class SplitShiftResult:
    segments: Tuple[Segment, ...]
    total_days: int
    total_work_minutes: int
    total_break_minutes: int
    is_multi_day: bool


@dataclass(frozen=True)
class RecordMetrics:
    """Per-record figures; `duration` is capped at the day's expected minutes."""

    duration: str
    net_work_minutes: int
    net_work_hours: float
    is_overtime: bool
    overtime_minutes: int
    efficiency: float


@dataclass(frozen=True)
class DailyStats:
    work_minutes: int
    break_minutes: int


@dataclass(frozen=True)
class ShiftPunctuality:
    arrival: PunctualityResult
    departure: Optional[PunctualityResult] = None


@dataclass(frozen=True)
class ProductivityMetrics:
    punctuality_score: float
    overtime_frequency: float
    work_efficiency_score: float
    shift_completion_rate: float
    late_arrivals_count: int
    early_departures_count: int
