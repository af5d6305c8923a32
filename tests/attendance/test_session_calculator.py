from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from attendance_engine.attendance.calculator import compute_session, efficiency, percentage, session_for_record
from attendance_engine.attendance.model import ShiftRecord
from attendance_engine.breaks.model import BreakInterval
from attendance_engine.core.enums import BreakMode
from attendance_engine.core.exceptions import ValidationError

BASE = datetime(2025, 1, 6, 8, 0)


def test_net_is_gross_minus_breaks():
    result = compute_session(BASE, BASE + timedelta(hours=9, minutes=25), 60)

    assert (result.gross_minutes, result.break_minutes, result.net_minutes) == (565, 60, 505)
    assert result.net_hours == pytest.approx(505 / 60)


def test_partial_minutes_are_floored():
    result = compute_session(BASE, BASE + timedelta(minutes=10, seconds=59), 0)

    assert result.gross_minutes == 10


def test_checkout_before_checkin_is_clamped(caplog):
    result = compute_session(BASE, BASE - timedelta(minutes=30), 0)

    assert result.gross_minutes == 0
    assert result.net_minutes == 0
    assert "precedes check-in" in caplog.text


def test_breaks_longer_than_shift_clamp_net():
    result = compute_session(BASE, BASE + timedelta(minutes=20), 45)

    assert result.net_minutes == 0


@given(
    offset=st.integers(min_value=-3 * 24 * 3600, max_value=3 * 24 * 3600),
    breaks=st.integers(min_value=0, max_value=5000),
)
def test_session_values_are_never_negative(offset, breaks):
    result = compute_session(BASE, BASE + timedelta(seconds=offset), breaks)

    assert result.gross_minutes >= 0
    assert 0 <= result.net_minutes <= result.gross_minutes
    assert result.net_hours >= 0


def test_open_record_needs_now():
    with pytest.raises(ValidationError):
        session_for_record(ShiftRecord(check_in=BASE))


def test_open_record_with_running_break_as_of_now():
    record = ShiftRecord(check_in=BASE, break_intervals=(BreakInterval(BASE + timedelta(hours=2)),))

    result = session_for_record(record, now=BASE + timedelta(hours=2, minutes=30), mode=BreakMode.AS_OF_NOW)

    assert (result.gross_minutes, result.break_minutes, result.net_minutes) == (150, 30, 120)


def test_percentages_guard_division_by_zero():
    assert percentage(1, 0) == 0.0
    assert percentage(2, 3) == 66.7
    assert efficiency(505, 565) == 89.4
