from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from attendance_engine.attendance.model import ShiftRecord
from attendance_engine.attendance.service import TimeAccountingService
from attendance_engine.breaks.model import BreakInterval
from attendance_engine.core.enums import PunctualityTier, Weekday
from attendance_engine.schedules.model import OrganizationSchedule, SpecialDate
from attendance_engine.schedules.service import ScheduleService

ORG = 1
WEEKDAYS = frozenset([Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY])


@dataclass
class InMemorySchedules:
    by_org: dict[int, OrganizationSchedule]

    def get_organization_schedule(self, organization_id: int) -> Optional[OrganizationSchedule]:
        return self.by_org.get(organization_id)


def _service(fixed_now: datetime, **schedule_overrides) -> TimeAccountingService:
    values = dict(
        organization_id=ORG,
        weekly_working_days=WEEKDAYS,
        default_open_time=time(8, 0),
        default_close_time=time(17, 0),
    )
    values.update(schedule_overrides)
    schedules = ScheduleService(InMemorySchedules({ORG: OrganizationSchedule(**values)}))
    return TimeAccountingService(schedules, clock=lambda: fixed_now, grace_minutes=15)


def _shift(check_in, check_out=None, breaks=(), legacy=None, org=ORG):
    return ShiftRecord(
        check_in=check_in,
        check_out=check_out,
        break_intervals=tuple(breaks),
        legacy_total_break_duration=legacy,
        organization_id=org,
    )


def test_late_arrival_with_overtime_on_a_regular_day(fixed_now):
    svc = _service(fixed_now)
    record = _shift(datetime(2025, 1, 6, 8, 20), datetime(2025, 1, 6, 17, 45))

    session = svc.work_session(record)
    punctuality = svc.punctuality(record)
    overtime = svc.overtime_for(record)

    assert session.net_minutes == 565
    assert punctuality.arrival.is_late
    assert punctuality.arrival.minutes == 5
    assert punctuality.arrival.tier == PunctualityTier.LATE
    assert not punctuality.departure.is_early
    assert overtime.is_overtime
    assert overtime.overtime_minutes == 25


def test_process_record_caps_duration_but_keeps_net(fixed_now):
    svc = _service(fixed_now)
    record = _shift(
        datetime(2025, 1, 6, 8, 0),
        datetime(2025, 1, 6, 18, 30),
        breaks=[BreakInterval(datetime(2025, 1, 6, 12, 0), datetime(2025, 1, 6, 12, 30))],
    )

    metrics = svc.process_record(record)

    assert metrics.duration == "9h 0m"
    assert metrics.net_work_minutes == 600
    assert metrics.net_work_hours == 10.0
    assert metrics.overtime_minutes == 60
    assert metrics.efficiency == 95.2


def test_process_record_open_shift_is_zero(fixed_now):
    metrics = _service(fixed_now).process_record(_shift(datetime(2025, 1, 6, 8, 0)))

    assert metrics.duration == "0h 0m"
    assert metrics.net_work_minutes == 0
    assert not metrics.is_overtime


def test_work_on_a_day_off_is_all_overtime(fixed_now):
    svc = _service(fixed_now)
    record = _shift(datetime(2025, 1, 11, 9, 0), datetime(2025, 1, 11, 12, 0))

    overtime = svc.overtime_for(record)
    punctuality = svc.punctuality(record)

    assert overtime.standard_minutes == 0
    assert overtime.overtime_minutes == 180
    assert punctuality.arrival.tier == PunctualityTier.ON_TIME


def test_special_date_moves_the_expected_start(fixed_now):
    svc = _service(
        fixed_now,
        special_dates=(SpecialDate(date=date(2025, 1, 6), open_time=time(10, 0), close_time=time(14, 0)),),
    )
    record = _shift(datetime(2025, 1, 6, 9, 50), datetime(2025, 1, 6, 13, 0))

    punctuality = svc.punctuality(record)

    assert not punctuality.arrival.is_late
    assert punctuality.departure.is_early
    assert punctuality.departure.minutes == 60
    assert punctuality.departure.tier == PunctualityTier.EARLY


def test_open_shift_is_measured_against_the_clock(fixed_now):
    svc = _service(fixed_now)

    session = svc.work_session(_shift(datetime(2025, 1, 6, 7, 0)))

    assert session.gross_minutes == 63


def test_daily_stats_include_active_shift_as_of_now(fixed_now):
    svc = _service(fixed_now)
    completed = [
        _shift(datetime(2025, 1, 6, 0, 0), datetime(2025, 1, 6, 2, 0), legacy="15m"),
        _shift(datetime(2025, 1, 6, 3, 0), None),
    ]
    active = _shift(
        datetime(2025, 1, 6, 7, 0),
        breaks=[BreakInterval(datetime(2025, 1, 6, 7, 50))],
    )

    stats = svc.daily_stats(completed, active)

    assert stats.break_minutes == 15 + 13
    assert stats.work_minutes == 105 + 50


def test_daily_totals_credit_night_shift_to_both_days(fixed_now):
    svc = _service(fixed_now)
    records = [
        _shift(datetime(2025, 1, 6, 22, 0), datetime(2025, 1, 7, 6, 0)),
        _shift(datetime(2025, 1, 7, 9, 0), datetime(2025, 1, 7, 10, 0)),
    ]

    totals = svc.daily_totals(records)

    assert totals == {date(2025, 1, 6): 120, date(2025, 1, 7): 420}


def test_productivity_metrics(fixed_now):
    svc = _service(fixed_now)
    records = [
        _shift(datetime(2025, 1, 6, 8, 0), datetime(2025, 1, 6, 17, 0)),
        _shift(datetime(2025, 1, 7, 8, 45), datetime(2025, 1, 7, 16, 0)),
        _shift(datetime(2025, 1, 8, 8, 0), datetime(2025, 1, 8, 18, 0)),
        _shift(datetime(2025, 1, 9, 8, 5)),
    ]

    metrics = svc.productivity_metrics(records)

    assert metrics.late_arrivals_count == 1
    assert metrics.early_departures_count == 1
    assert metrics.punctuality_score == 75.0
    assert metrics.overtime_frequency == 33.3
    assert metrics.shift_completion_rate == 75.0
    assert metrics.work_efficiency_score == 100.0


def test_productivity_metrics_empty(fixed_now):
    metrics = _service(fixed_now).productivity_metrics([])

    assert metrics.punctuality_score == 0.0
    assert metrics.late_arrivals_count == 0


def test_record_without_organization_uses_default_hours(fixed_now):
    svc = _service(fixed_now)
    record = _shift(datetime(2025, 1, 6, 7, 50), datetime(2025, 1, 6, 16, 30), org=None)

    punctuality = svc.punctuality(record)

    assert punctuality.arrival.minutes == 5
    assert svc.overtime_for(record).standard_minutes == 540
