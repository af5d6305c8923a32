from __future__ import annotations

from datetime import datetime

import pytest

from attendance_engine.breaks.aggregator import total_break_minutes
from attendance_engine.breaks.model import BreakInterval
from attendance_engine.core.enums import BreakMode
from attendance_engine.core.exceptions import ValidationError


def _at(hour, minute, second=0):
    return datetime(2025, 1, 6, hour, minute, second)


def test_completed_intervals_are_summed():
    intervals = [
        BreakInterval(_at(10, 0), _at(10, 15)),
        BreakInterval(_at(12, 30), _at(13, 0, 59)),
    ]

    assert total_break_minutes(intervals) == 45


def test_active_break_ignored_when_completed_only():
    intervals = [BreakInterval(_at(10, 0), _at(10, 15)), BreakInterval(_at(12, 0))]

    assert total_break_minutes(intervals) == 15


def test_active_break_counts_as_of_now():
    intervals = [BreakInterval(_at(10, 0), _at(10, 15)), BreakInterval(_at(12, 0))]

    assert total_break_minutes(intervals, mode=BreakMode.AS_OF_NOW, now=_at(12, 20)) == 35


def test_as_of_now_requires_now():
    with pytest.raises(ValidationError):
        total_break_minutes([BreakInterval(_at(12, 0))], mode=BreakMode.AS_OF_NOW)


def test_intervals_win_over_legacy_string():
    assert total_break_minutes([BreakInterval(_at(10, 0), _at(10, 5))], "1h") == 5


@pytest.mark.parametrize(
    "legacy, expected",
    [("1h 30m", 90), ("00:45:00", 45), ("20 minutes", 20), ("0", 0), ("", 0), (None, 0), ("??", 0)],
)
def test_legacy_string_when_no_intervals(legacy, expected):
    assert total_break_minutes([], legacy) == expected


def test_reversed_interval_counts_zero():
    interval = BreakInterval(_at(10, 15), _at(10, 0))

    assert interval.duration_minutes == 0
    assert total_break_minutes([interval]) == 0


def test_overlapping_intervals_are_summed_as_recorded():
    intervals = [BreakInterval(_at(10, 0), _at(10, 30)), BreakInterval(_at(10, 15), _at(10, 45))]

    assert total_break_minutes(intervals) == 60


def test_running_break_has_no_duration():
    interval = BreakInterval(_at(10, 0))

    assert interval.is_active
    assert interval.duration_minutes is None
    assert interval.minutes_as_of(_at(10, 7, 30)) == 7
