from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import FrozenSet, Mapping, Optional, Tuple

from ..core.constants import DEFAULT_CLOSE_TIME, DEFAULT_OPEN_TIME, DEFAULT_WORKING_DAYS
from ..core.enums import ScheduleSource, Weekday


@dataclass(frozen=True)
class DaySchedule:
    """Per-weekday hours. Usable only when not closed and both ends are set."""

    start: Optional[time] = None
    end: Optional[time] = None
    closed: bool = False

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None


@dataclass(frozen=True)
class SpecialDate:
    """Exact-date override (public holiday hours, stocktake day, ...)."""

    date: date
    open_time: time
    close_time: time
    reason: Optional[str] = None


@dataclass(frozen=True)
class OrganizationSchedule:
    """Canonical organization hours, normalized once at the storage boundary."""

    organization_id: Optional[int] = None
    weekly_working_days: FrozenSet[Weekday] = frozenset(Weekday(d) for d in DEFAULT_WORKING_DAYS)
    per_day_schedule: Mapping[Weekday, DaySchedule] = field(default_factory=dict)
    special_dates: Tuple[SpecialDate, ...] = ()
    default_open_time: time = DEFAULT_OPEN_TIME
    default_close_time: time = DEFAULT_CLOSE_TIME
    holiday_mode: bool = False
    holiday_until: Optional[date] = None
    timezone: Optional[str] = None

    def special_date_for(self, day: date) -> Optional[SpecialDate]:
        for special in self.special_dates:
            if special.date == day:
                return special
        return None


@dataclass(frozen=True)
class ResolvedWorkingDay:
    """Effective hours of one organization on one calendar date."""

    day: date
    is_working_day: bool
    expected_start: Optional[time]
    expected_end: Optional[time]
    expected_minutes: int
    source: ScheduleSource
    reason: Optional[str] = None
