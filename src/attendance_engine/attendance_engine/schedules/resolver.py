"""Resolve an organization's effective hours for one calendar date.

Precedence is fixed: holiday mode, then an exact special date, then the
per-weekday schedule, then the weekly flag with the default open/close times.
Times are compared as minutes since midnight in the organization's zone.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import time_to_minutes
from ..core.enums import ScheduleSource, Weekday
from .model import OrganizationSchedule, ResolvedWorkingDay

BUILT_IN_SCHEDULE = OrganizationSchedule()


def expected_minutes(start: Optional[time], end: Optional[time]) -> int:
    if start is None or end is None:
        return 0
    return max(0, time_to_minutes(end) - time_to_minutes(start))


def _closed(day: date, source: ScheduleSource, reason: str) -> ResolvedWorkingDay:
    return ResolvedWorkingDay(
        day=day,
        is_working_day=False,
        expected_start=None,
        expected_end=None,
        expected_minutes=0,
        source=source,
        reason=reason,
    )


def _open(day: date, start: time, end: time, source: ScheduleSource, reason: Optional[str] = None) -> ResolvedWorkingDay:
    return ResolvedWorkingDay(
        day=day,
        is_working_day=True,
        expected_start=start,
        expected_end=end,
        expected_minutes=expected_minutes(start, end),
        source=source,
        reason=reason,
    )


def is_holiday(schedule: OrganizationSchedule, day: date) -> bool:
    if not schedule.holiday_mode:
        return False
    return schedule.holiday_until is None or day <= schedule.holiday_until


def resolve(schedule: Optional[OrganizationSchedule], day: date) -> ResolvedWorkingDay:
    weekday = Weekday.of(day)

    if schedule is None:
        resolved = _weekly(BUILT_IN_SCHEDULE, day, weekday)
        reason = "No operating hours configured" if resolved.is_working_day else resolved.reason
        return replace(resolved, source=ScheduleSource.DEFAULT, reason=reason)

    if is_holiday(schedule, day):
        until = f" until {schedule.holiday_until.isoformat()}" if schedule.holiday_until else ""
        return _closed(day, ScheduleSource.HOLIDAY, f"Organization is in holiday mode{until}")

    special = schedule.special_date_for(day)
    if special is not None:
        return _open(day, special.open_time, special.close_time, ScheduleSource.SPECIAL_DATE, special.reason)

    per_day = schedule.per_day_schedule.get(weekday)
    if per_day is not None:
        if per_day.closed:
            return _closed(day, ScheduleSource.PER_DAY, f"Organization is closed on {weekday.value}s")
        if per_day.is_complete:
            return _open(day, per_day.start, per_day.end, ScheduleSource.PER_DAY)

    return _weekly(schedule, day, weekday)


def _weekly(schedule: OrganizationSchedule, day: date, weekday: Weekday) -> ResolvedWorkingDay:
    if weekday not in schedule.weekly_working_days:
        return _closed(day, ScheduleSource.WEEKLY, f"Organization is closed on {weekday.value}s")
    return _open(day, schedule.default_open_time, schedule.default_close_time, ScheduleSource.WEEKLY)
