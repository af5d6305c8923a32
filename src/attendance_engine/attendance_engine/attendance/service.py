from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Dict, Optional, Sequence

from ..breaks.aggregator import total_break_minutes
from ..common.datetime_utils import Clock, now_local, whole_minutes_between
from ..core.constants import DEFAULT_GRACE_MINUTES, DEFAULT_STANDARD_MINUTES
from ..core.enums import BreakMode, PunctualityKind
from ..durations.formatter import format_duration
from ..overtime.calculator.base import OvertimeCalculator
from ..overtime.calculator.standard_calculator import StandardOvertimeCalculator
from ..overtime.model import OvertimeResult
from ..punctuality.factory import evaluate
from ..schedules.model import ResolvedWorkingDay
from ..schedules.service import ScheduleService
from .calculator import efficiency, percentage, session_for_record
from .model import (
    DailyStats,
    ProductivityMetrics,
    RecordMetrics,
    ShiftPunctuality,
    ShiftRecord,
    WorkSessionResult,
)
from .splitter import split_shift

logger = logging.getLogger(__name__)


class TimeAccountingService:
    """Use case: turn shift records into worked time, punctuality and overtime.

    Reads schedules through `ScheduleService`; every figure is otherwise a
    pure function of the record, the resolved day and the injected clock.
    """

    def __init__(
        self,
        schedules: ScheduleService,
        *,
        clock: Optional[Clock] = None,
        overtime_calculator: Optional[OvertimeCalculator] = None,
        grace_minutes: int = DEFAULT_GRACE_MINUTES,
        standard_minutes: int = DEFAULT_STANDARD_MINUTES,
    ):
        self._schedules = schedules
        self._clock = clock or now_local
        self._overtime = overtime_calculator or StandardOvertimeCalculator(standard_minutes)
        self._grace_minutes = int(grace_minutes)

    @property
    def grace_minutes(self) -> int:
        return self._grace_minutes

    def resolved_day(self, record: ShiftRecord, on: Optional[date] = None) -> ResolvedWorkingDay:
        return self._schedules.resolve_for(record.organization_id, on or record.check_in.date())

    def work_session(
        self,
        record: ShiftRecord,
        *,
        now: Optional[datetime] = None,
        mode: BreakMode = BreakMode.COMPLETED_ONLY,
    ) -> WorkSessionResult:
        return session_for_record(record, now=now or self._clock(), mode=mode)

    def punctuality(self, record: ShiftRecord) -> ShiftPunctuality:
        arrival = evaluate(
            record.check_in,
            self.resolved_day(record),
            self._grace_minutes,
            PunctualityKind.ARRIVAL,
        )
        departure = None
        if record.check_out is not None:
            departure = evaluate(
                record.check_out,
                self.resolved_day(record, record.check_out.date()),
                self._grace_minutes,
                PunctualityKind.DEPARTURE,
            )
        return ShiftPunctuality(arrival=arrival, departure=departure)

    def overtime_for(self, record: ShiftRecord, *, now: Optional[datetime] = None) -> OvertimeResult:
        session = self.work_session(record, now=now)
        return self._overtime.overtime(session.net_minutes, self.resolved_day(record))

    def process_record(self, record: ShiftRecord) -> RecordMetrics:
        """Completed-record figures with duration capped at the expected day."""
        if record.check_out is None:
            return RecordMetrics(
                duration=format_duration(0),
                net_work_minutes=0,
                net_work_hours=0.0,
                is_overtime=False,
                overtime_minutes=0,
                efficiency=0.0,
            )

        session = session_for_record(record)
        result = self._overtime.overtime(session.net_minutes, self.resolved_day(record))
        return RecordMetrics(
            duration=format_duration(result.capped_minutes),
            net_work_minutes=session.net_minutes,
            net_work_hours=session.net_hours,
            is_overtime=result.is_overtime,
            overtime_minutes=result.overtime_minutes,
            efficiency=efficiency(session.net_minutes, session.gross_minutes),
        )

    def daily_stats(
        self,
        records: Sequence[ShiftRecord],
        active_shift: Optional[ShiftRecord] = None,
        *,
        now: Optional[datetime] = None,
    ) -> DailyStats:
        """Work/break minutes of completed shifts plus the live one, if any."""
        work = 0
        breaks = 0
        for record in records:
            if record.check_out is None:
                continue
            session = session_for_record(record)
            work += session.net_minutes
            breaks += session.break_minutes

        if active_shift is not None:
            now = now or self._clock()
            session = session_for_record(active_shift, now=now, mode=BreakMode.AS_OF_NOW)
            work += session.net_minutes
            breaks += session.break_minutes

        return DailyStats(work_minutes=work, break_minutes=breaks)

    def daily_totals(self, records: Sequence[ShiftRecord], *, now: Optional[datetime] = None) -> Dict[date, int]:
        """Net minutes credited to each calendar day, multi-day shifts split at midnight."""
        now = now or self._clock()
        totals: Dict[date, int] = defaultdict(int)
        for record in records:
            for segment in split_shift(
                record.check_in,
                record.check_out,
                record.break_intervals,
                record.legacy_total_break_duration,
                now=now,
            ):
                totals[segment.date] += segment.net_work_minutes
        return dict(sorted(totals.items()))

    def productivity_metrics(self, records: Sequence[ShiftRecord]) -> ProductivityMetrics:
        completed = [r for r in records if r.check_out is not None]

        late = 0
        early = 0
        overtime_shifts = 0
        gross_total = 0
        break_total = 0

        for record in records:
            punctuality = self.punctuality(record)
            if punctuality.arrival.is_late:
                late += 1
            if punctuality.departure is not None and punctuality.departure.is_early:
                early += 1

        for record in completed:
            gross = max(0, whole_minutes_between(record.check_in, record.check_out))
            breaks = total_break_minutes(record.break_intervals, record.legacy_total_break_duration)
            gross_total += gross
            break_total += breaks
            result = self._overtime.overtime(max(0, gross - breaks), self.resolved_day(record))
            if result.is_overtime:
                overtime_shifts += 1

        logger.debug("Productivity over %d records (%d completed)", len(records), len(completed))
        return ProductivityMetrics(
            punctuality_score=percentage(len(records) - late, len(records)),
            overtime_frequency=percentage(overtime_shifts, len(completed)),
            work_efficiency_score=efficiency(max(0, gross_total - break_total), gross_total),
            shift_completion_rate=percentage(len(completed), len(records)),
            late_arrivals_count=late,
            early_departures_count=early,
        )
