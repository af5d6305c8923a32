"""Average clock times of day.

Clock times wrap at 24:00, so an arithmetic mean of minute values puts the
average of 23:50 and 00:10 at noon. Each time is mapped to an angle on the
24-hour circle and the mean direction of the unit vectors is taken instead.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Union

import numpy as np

from ..common.datetime_utils import format_clock, minutes_of_day
from ..common.rounding import round_half_up
from ..core.constants import MINUTES_PER_DAY, NOT_AVAILABLE

# Below this resultant length the times cancel out and have no mean direction.
_MIN_RESULTANT = 1e-9


def _to_minutes(value: Union[datetime, str]) -> int:
    if isinstance(value, str):
        hours, minutes = value.strip().split(":")[:2]
        return (int(hours) * 60 + int(minutes)) % MINUTES_PER_DAY
    return minutes_of_day(value)


def mean_minute_of_day(values: Iterable[Union[datetime, str]]):
    minutes = np.array([_to_minutes(v) for v in values], dtype=float)
    if minutes.size == 0:
        return None

    angles = minutes / MINUTES_PER_DAY * 2 * np.pi
    x = np.cos(angles).mean()
    y = np.sin(angles).mean()
    if np.hypot(x, y) < _MIN_RESULTANT:
        return None

    angle = np.arctan2(y, x) % (2 * np.pi)
    return round_half_up(float(angle / (2 * np.pi) * MINUTES_PER_DAY)) % MINUTES_PER_DAY


def average_time_of_day(timestamps: Iterable[Union[datetime, str]]) -> str:
    """Circular mean of clock times as "HH:MM", or "N/A" when there is none."""
    mean = mean_minute_of_day(timestamps)
    if mean is None:
        return NOT_AVAILABLE
    return format_clock(mean)
