from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import ShiftRecord


class ShiftRecordRepository(Protocol):
    def list_for_user(self, *, user_id: int, start_date: date, end_date: date) -> Sequence[ShiftRecord]:
        """Shifts checked in between the two dates (inclusive), oldest first.

        Timestamps must already be in the organization's local time.
        """

        raise NotImplementedError
