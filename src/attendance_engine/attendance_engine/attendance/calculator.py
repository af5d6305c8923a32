from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..breaks.aggregator import total_break_minutes
from ..common.datetime_utils import whole_minutes_between
from ..common.rounding import round_to
from ..core.constants import MINUTES_PER_HOUR, PRECISION_PERCENTAGE
from ..core.enums import BreakMode
from ..core.exceptions import ValidationError
from .model import ShiftRecord, WorkSessionResult

logger = logging.getLogger(__name__)


def compute_session(check_in: datetime, check_out_or_now: datetime, break_minutes: int) -> WorkSessionResult:
    """Net worked time of one check-in/check-out pair.

    A check-out before the check-in is clamped to zero gross minutes.
    `net_hours` is left unrounded; display rounding belongs to the caller.
    """

    elapsed = whole_minutes_between(check_in, check_out_or_now)
    if elapsed < 0:
        logger.warning("Check-out %s precedes check-in %s; clamping to zero", check_out_or_now, check_in)
    gross = max(0, elapsed)
    breaks = max(0, int(break_minutes or 0))
    net = max(0, gross - breaks)
    return WorkSessionResult(
        gross_minutes=gross,
        break_minutes=breaks,
        net_minutes=net,
        net_hours=net / MINUTES_PER_HOUR,
    )


def session_for_record(
    record: ShiftRecord,
    *,
    now: Optional[datetime] = None,
    mode: BreakMode = BreakMode.COMPLETED_ONLY,
) -> WorkSessionResult:
    end = record.check_out if record.check_out is not None else now
    if end is None:
        raise ValidationError("now is required for an open shift")
    breaks = total_break_minutes(
        record.break_intervals,
        record.legacy_total_break_duration,
        mode=mode,
        now=now if now is not None else end,
    )
    return compute_session(record.check_in, end, breaks)


def percentage(part: float, total: float, precision: int = PRECISION_PERCENTAGE) -> float:
    if not total:
        return 0.0
    return round_to(part / total * 100, precision)


def efficiency(work_minutes: float, total_minutes: float) -> float:
    """Share of elapsed time actually worked, in percent."""
    return percentage(work_minutes, total_minutes, PRECISION_PERCENTAGE)
