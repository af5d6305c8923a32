from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import whole_minutes_between


@dataclass(frozen=True)
class BreakInterval:
    """One break inside a shift. `end_time` is None while the break is running."""

    start_time: datetime
    end_time: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    @property
    def duration_minutes(self) -> Optional[int]:
        """Derived from start/end, never stored; None while the break is running."""
        if self.end_time is None:
            return None
        return max(0, whole_minutes_between(self.start_time, self.end_time))

    def minutes_as_of(self, now: datetime) -> int:
        end = self.end_time if self.end_time is not None else now
        return max(0, whole_minutes_between(self.start_time, end))
