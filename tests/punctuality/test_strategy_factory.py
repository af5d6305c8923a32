from datetime import date, datetime, time

import pytest

from attendance_engine.core.enums import PunctualityKind, PunctualityTier, ScheduleSource
from attendance_engine.punctuality.factory import PunctualityStrategyFactory, evaluate
from attendance_engine.punctuality.strategies.early_strategy import DepartureStrategy
from attendance_engine.punctuality.strategies.late_strategy import ArrivalStrategy
from attendance_engine.punctuality.strategies.normal_strategy import OnTimeStrategy
from attendance_engine.schedules.model import ResolvedWorkingDay

TODAY = date(2025, 1, 6)


def _day(start=time(8, 0), end=time(17, 0), working=True):
    return ResolvedWorkingDay(
        day=TODAY,
        is_working_day=working,
        expected_start=start if working else None,
        expected_end=end if working else None,
        expected_minutes=540 if working else 0,
        source=ScheduleSource.WEEKLY,
    )


def test_factory_picks_strategy_per_kind():
    factory = PunctualityStrategyFactory()

    assert isinstance(factory.for_kind(kind=PunctualityKind.ARRIVAL, day=_day()), ArrivalStrategy)
    assert isinstance(factory.for_kind(kind=PunctualityKind.DEPARTURE, day=_day()), DepartureStrategy)


def test_factory_day_off_is_always_on_time():
    factory = PunctualityStrategyFactory()

    assert isinstance(factory.for_kind(kind=PunctualityKind.ARRIVAL, day=_day(working=False)), OnTimeStrategy)


def test_factory_missing_boundary_is_on_time():
    factory = PunctualityStrategyFactory()
    day = ResolvedWorkingDay(
        day=TODAY,
        is_working_day=True,
        expected_start=None,
        expected_end=time(17, 0),
        expected_minutes=0,
        source=ScheduleSource.PER_DAY,
    )

    assert isinstance(factory.for_kind(kind=PunctualityKind.ARRIVAL, day=day), OnTimeStrategy)


def test_checkin_within_grace_is_on_time():
    result = evaluate(datetime(2025, 1, 6, 8, 15, 59), _day(), grace_minutes=15)

    assert not result.is_late
    assert result.tier == PunctualityTier.ON_TIME
    assert result.minutes == 0


@pytest.mark.parametrize(
    "arrival, minutes, tier",
    [
        (time(8, 16), 1, PunctualityTier.LATE),
        (time(8, 44), 29, PunctualityTier.LATE),
        (time(8, 45), 30, PunctualityTier.VERY_LATE),
        (time(9, 14), 59, PunctualityTier.VERY_LATE),
        (time(9, 15), 60, PunctualityTier.EXTREMELY_LATE),
    ],
)
def test_lateness_tiers(arrival, minutes, tier):
    result = evaluate(datetime.combine(TODAY, arrival), _day(), grace_minutes=15)

    assert result.is_late
    assert result.minutes == minutes
    assert result.tier == tier


def test_early_checkout_has_no_grace():
    result = evaluate(datetime(2025, 1, 6, 16, 59), _day(), grace_minutes=15, kind=PunctualityKind.DEPARTURE)

    assert result.is_early
    assert result.minutes == 1
    assert result.tier == PunctualityTier.EARLY
    assert result.kind == PunctualityKind.DEPARTURE


def test_departure_after_end_is_on_time():
    result = evaluate(datetime(2025, 1, 6, 18, 0), _day(), kind=PunctualityKind.DEPARTURE)

    assert not result.is_early
    assert result.minutes == 0


def test_zero_grace():
    assert evaluate(datetime(2025, 1, 6, 8, 1), _day(), grace_minutes=0).minutes == 1
