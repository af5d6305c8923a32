from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..attendance.model import ProductivityMetrics
from ..attendance.repository import ShiftRecordRepository
from ..attendance.service import TimeAccountingService
from ..durations.formatter import format_duration
from ..stats.averages import AverageTimes, average_times


@dataclass(frozen=True)
class MetricsReport:
    rows: list[dict]
    total_minutes: int
    total_duration: str
    averages: AverageTimes
    productivity: ProductivityMetrics


class AttendanceMetricsService:
    def __init__(self, shifts: ShiftRecordRepository, accounting: TimeAccountingService):
        self._shifts = shifts
        self._accounting = accounting

    def build_user_report(
        self,
        *,
        user_id: int,
        start: date,
        end: date,
        now: Optional[datetime] = None,
    ) -> MetricsReport:
        records = self._shifts.list_for_user(user_id=user_id, start_date=start, end_date=end)
        per_day = self._accounting.daily_totals(records, now=now)

        out_rows: list[dict] = []
        total_minutes = 0
        for day, minutes in per_day.items():
            # A night shift that began before `start` or ran past `end` only counts inside the range.
            if day < start or day > end:
                continue
            total_minutes += minutes
            out_rows.append(
                {
                    "date": day.strftime("%Y-%m-%d"),
                    "net_minutes": minutes,
                    "worked": format_duration(minutes),
                }
            )

        return MetricsReport(
            rows=out_rows,
            total_minutes=total_minutes,
            total_duration=format_duration(total_minutes),
            averages=average_times(records),
            productivity=self._accounting.productivity_metrics(records),
        )
