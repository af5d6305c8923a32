from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from ..common.datetime_utils import minutes_of_day, time_to_minutes
from ..common.rounding import round_to
from ..core.constants import MINUTES_PER_HOUR, PRECISION_DISPLAY
from ..core.enums import Weekday
from .cache import TTLCache
from .model import OrganizationSchedule, ResolvedWorkingDay
from .repository import OrganizationScheduleRepository
from .resolver import BUILT_IN_SCHEDULE, expected_minutes, is_holiday, resolve

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class OpenStatus:
    is_open: bool
    is_working_day: bool
    is_holiday_mode: bool
    weekday: Weekday
    reason: Optional[str] = None
    scheduled_open: Optional[str] = None
    scheduled_close: Optional[str] = None


@dataclass(frozen=True)
class PeakHours:
    start_time: str
    end_time: str
    expected_daily_hours: float


class ScheduleService:
    """Read-through access to organization hours and their per-date resolution.

    Both the fetched schedule (per organization) and each resolved day (per
    organization and date) are cached; answers are identical with an empty
    cache since resolution is a pure function of the schedule.
    """

    def __init__(self, schedules: OrganizationScheduleRepository, *, cache: Optional[TTLCache] = None):
        self._schedules = schedules
        self._cache = cache if cache is not None else TTLCache()

    def get_schedule(self, organization_id: Optional[int]) -> Optional[OrganizationSchedule]:
        if organization_id is None:
            return None

        key = ("schedule", int(organization_id))
        cached = self._cache.get(key, _MISSING)
        if cached is not _MISSING:
            return cached

        try:
            schedule = self._schedules.get_organization_schedule(int(organization_id))
        except Exception:
            logger.error("Failed to load hours for organization %s", organization_id)
            raise

        logger.debug("Loaded hours for organization %s (configured=%s)", organization_id, schedule is not None)
        self._cache.set(key, schedule)
        return schedule

    def resolve_for(self, organization_id: Optional[int], day: date) -> ResolvedWorkingDay:
        if organization_id is None:
            return resolve(None, day)

        key = ("day", int(organization_id), day)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        resolved = resolve(self.get_schedule(organization_id), day)
        self._cache.set(key, resolved)
        return resolved

    def invalidate(self, organization_id: int) -> int:
        """Drop everything cached for one organization (call after an hours update)."""
        org = int(organization_id)
        return self._cache.delete_where(lambda key: key[1] == org)

    def clear_cache(self) -> None:
        self._cache.clear()

    def working_days(self, organization_id: Optional[int]) -> List[str]:
        schedule = self.get_schedule(organization_id) or BUILT_IN_SCHEDULE
        return [d.value for d in Weekday if d in schedule.weekly_working_days]

    def peak_working_hours(self, organization_id: Optional[int]) -> PeakHours:
        schedule = self.get_schedule(organization_id) or BUILT_IN_SCHEDULE
        minutes = expected_minutes(schedule.default_open_time, schedule.default_close_time)
        return PeakHours(
            start_time=schedule.default_open_time.strftime("%H:%M"),
            end_time=schedule.default_close_time.strftime("%H:%M"),
            expected_daily_hours=round_to(minutes / MINUTES_PER_HOUR, PRECISION_DISPLAY),
        )

    def is_open(self, organization_id: Optional[int], at: datetime) -> OpenStatus:
        """Whether the organization is open at a local wall-clock instant."""
        schedule = self.get_schedule(organization_id)
        day = self.resolve_for(organization_id, at.date())
        weekday = Weekday.of(at.date())
        holiday = schedule is not None and is_holiday(schedule, at.date())

        if not day.is_working_day:
            return OpenStatus(
                is_open=False,
                is_working_day=False,
                is_holiday_mode=holiday,
                weekday=weekday,
                reason=day.reason,
            )

        start = time_to_minutes(day.expected_start)
        end = time_to_minutes(day.expected_end)
        now = minutes_of_day(at)
        within = start <= now <= end
        opens = day.expected_start.strftime("%H:%M")
        closes = day.expected_end.strftime("%H:%M")
        return OpenStatus(
            is_open=within,
            is_working_day=True,
            is_holiday_mode=False,
            weekday=weekday,
            reason="Within operating hours" if within else f"Outside operating hours ({opens} - {closes})",
            scheduled_open=opens,
            scheduled_close=closes,
        )
