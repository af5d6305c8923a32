"""Attribute a shift's worked minutes to the calendar days it touches.

Daily reports credit hours to the day they were worked, so a 23:00-07:00
shift shows up in both days. Minute counts are taken by telescoping floors
along one timeline (minutes elapsed since check-in at each day boundary), so
the per-day gross minutes add up exactly to the whole-shift gross minutes.
Break intervals are cut the same way at midnight, anchored at the break's own
start, so each break contributes exactly its whole-shift minute count. Break
time beyond a day's gross minutes (overlapping breaks, breaks logged past
the shift ends) is taken from neighbouring days, so per-day net minutes add
up to the whole-shift net.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple

from ..breaks.aggregator import total_break_minutes
from ..breaks.model import BreakInterval
from ..common.datetime_utils import next_midnight, whole_minutes_between
from ..core.enums import BreakMode
from ..core.exceptions import ValidationError
from .calculator import compute_session
from .model import Segment, SplitShiftResult

_Window = Tuple[date, datetime, datetime]


def _day_windows(start: datetime, end: datetime) -> List[_Window]:
    windows: List[_Window] = []
    cursor = start
    while cursor < end:
        slice_end = min(next_midnight(cursor), end)
        windows.append((cursor.date(), cursor, slice_end))
        cursor = slice_end
    return windows


def _minutes_within(anchor: datetime, lo: datetime, hi: datetime) -> int:
    return whole_minutes_between(anchor, hi) - whole_minutes_between(anchor, lo)


def _interval_breaks_per_day(
    windows: Sequence[_Window],
    intervals: Sequence[BreakInterval],
    *,
    mode: BreakMode,
    now: datetime,
) -> List[int]:
    per_day = [0] * len(windows)
    last = len(windows) - 1
    for interval in intervals:
        b_start = interval.start_time
        if interval.end_time is not None:
            b_end = interval.end_time
        elif mode is BreakMode.AS_OF_NOW:
            b_end = now
        else:
            continue
        if b_end <= b_start:
            continue

        for i, (_, slice_start, slice_end) in enumerate(windows):
            # The outer windows are open-ended so breaks logged outside the
            # shift bounds still land on the first or last day.
            lo = b_start if i == 0 else max(b_start, slice_start)
            hi = b_end if i == last else min(b_end, slice_end)
            if hi > lo:
                per_day[i] += _minutes_within(b_start, lo, hi)
    return per_day


def _legacy_breaks_per_day(gross: Sequence[int], total_break: int) -> List[int]:
    """Spread a free-text break total over days in proportion to gross minutes.

    Largest-remainder apportionment keeps the sum equal to `total_break`.
    """

    total_gross = sum(gross)
    if total_gross <= 0:
        return [total_break] + [0] * (len(gross) - 1)

    shares = [total_break * g // total_gross for g in gross]
    remainders = [total_break * g % total_gross for g in gross]
    leftover = total_break - sum(shares)
    for i in sorted(range(len(gross)), key=lambda k: (-remainders[k], k))[:leftover]:
        shares[i] += 1
    return shares


def _net_per_day(gross: Sequence[int], breaks: Sequence[int]) -> List[int]:
    """Per-day net minutes with break overflow carried onto other days.

    A day whose breaks exceed its gross minutes pushes the excess onto later
    days first, then earlier ones, so the days sum to max(0, gross - breaks).
    """

    net = [max(0, g - b) for g, b in zip(gross, breaks)]
    carry = 0
    for i, (g, b) in enumerate(zip(gross, breaks)):
        taken = min(net[i], carry)
        net[i] -= taken
        carry += max(0, b - g) - taken
    for i in reversed(range(len(net))):
        taken = min(net[i], carry)
        net[i] -= taken
        carry -= taken
    return net


def split_shift(
    check_in: datetime,
    check_out: Optional[datetime],
    break_intervals: Sequence[BreakInterval] = (),
    legacy_break: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
    mode: BreakMode = BreakMode.COMPLETED_ONLY,
) -> List[Segment]:
    end = check_out if check_out is not None else now
    if end is None:
        raise ValidationError("now is required to split an open shift")
    as_of = now if now is not None else end

    if check_out is None or check_out.date() == check_in.date() or end <= check_in:
        breaks = total_break_minutes(break_intervals, legacy_break, mode=mode, now=as_of)
        session = compute_session(check_in, end, breaks)
        return [
            Segment(
                date=check_in.date(),
                start=check_in,
                end=max(end, check_in),
                work_minutes=session.gross_minutes,
                break_minutes=session.break_minutes,
                net_work_minutes=session.net_minutes,
            )
        ]

    windows = _day_windows(check_in, end)
    gross = [_minutes_within(check_in, slice_start, slice_end) for _, slice_start, slice_end in windows]

    if break_intervals:
        breaks_per_day = _interval_breaks_per_day(windows, break_intervals, mode=mode, now=as_of)
    else:
        legacy_total = total_break_minutes((), legacy_break)
        breaks_per_day = _legacy_breaks_per_day(gross, legacy_total)

    net_per_day = _net_per_day(gross, breaks_per_day)
    return [
        Segment(
            date=day,
            start=slice_start,
            end=slice_end,
            work_minutes=g,
            break_minutes=b,
            net_work_minutes=n,
        )
        for (day, slice_start, slice_end), g, b, n in zip(windows, gross, breaks_per_day, net_per_day)
    ]


def split_shift_summary(
    check_in: datetime,
    check_out: Optional[datetime],
    break_intervals: Sequence[BreakInterval] = (),
    legacy_break: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
    mode: BreakMode = BreakMode.COMPLETED_ONLY,
) -> SplitShiftResult:
    segments = split_shift(check_in, check_out, break_intervals, legacy_break, now=now, mode=mode)
    return SplitShiftResult(
        segments=tuple(segments),
        total_days=len(segments),
        total_work_minutes=sum(s.work_minutes for s in segments),
        total_break_minutes=sum(s.break_minutes for s in segments),
        is_multi_day=len(segments) > 1,
    )
