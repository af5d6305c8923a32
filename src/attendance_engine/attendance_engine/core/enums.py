from __future__ import annotations

from datetime import date
from enum import Enum


class Weekday(str, Enum):
    """Weekday keys as stored in organization-hours JSON."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def of(cls, day: date) -> "Weekday":
        return _BY_INDEX[day.weekday()]


_BY_INDEX = list(Weekday)


class ScheduleSource(str, Enum):
    """Which precedence level produced a resolved working day."""

    HOLIDAY = "HOLIDAY"
    SPECIAL_DATE = "SPECIAL_DATE"
    PER_DAY = "PER_DAY"
    WEEKLY = "WEEKLY"
    DEFAULT = "DEFAULT"


class BreakMode(str, Enum):
    """Whether an in-progress break counts toward the total."""

    COMPLETED_ONLY = "COMPLETED_ONLY"
    AS_OF_NOW = "AS_OF_NOW"


class PunctualityKind(str, Enum):
    ARRIVAL = "arrival"
    DEPARTURE = "departure"


class PunctualityTier(str, Enum):
    ON_TIME = "on-time"
    LATE = "late"
    VERY_LATE = "very-late"
    EXTREMELY_LATE = "extremely-late"
    EARLY = "early"
