"""Parse raw organization-hours rows into `OrganizationSchedule`.

Stored rows are loosely shaped: JSON columns may come back as text or as
already-decoded dicts, open/close values may be strings, times, timestamps
or MySQL TIME deltas, and per-day entries may be partial. All of that is
handled here once so the resolver only ever sees the canonical structure.
Malformed fields are dropped with a warning rather than failing the row.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Tuple

from ..common.datetime_utils import normalize_time, parse_iso_date
from ..core.constants import DEFAULT_CLOSE_TIME, DEFAULT_OPEN_TIME, DEFAULT_WORKING_DAYS
from ..core.enums import Weekday
from .model import DaySchedule, OrganizationSchedule, SpecialDate

logger = logging.getLogger(__name__)


def _decode_json(value: Any, field_name: str) -> Any:
    if value is None or value == "":
        return None
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed JSON in %s: %r", field_name, value)
            return None
    return value


def _optional_time(value: Any, field_name: str):
    if value is None or value == "":
        return None
    try:
        return normalize_time(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed time in %s: %r", field_name, value)
        return None


def _optional_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value)[:10])
    except ValueError:
        logger.warning("Ignoring malformed date in %s: %r", field_name, value)
        return None


def _weekly_days(raw: Any):
    flags = _decode_json(raw, "weekly_schedule")
    if not isinstance(flags, Mapping):
        return frozenset(Weekday(d) for d in DEFAULT_WORKING_DAYS)
    days = set()
    for key, enabled in flags.items():
        try:
            weekday = Weekday(str(key).lower())
        except ValueError:
            logger.warning("Ignoring unknown weekday %r in weekly_schedule", key)
            continue
        if enabled:
            days.add(weekday)
    return frozenset(days)


def _per_day(raw: Any) -> Dict[Weekday, DaySchedule]:
    entries = _decode_json(raw, "schedule")
    if not isinstance(entries, Mapping):
        return {}
    out: Dict[Weekday, DaySchedule] = {}
    for key, entry in entries.items():
        try:
            weekday = Weekday(str(key).lower())
        except ValueError:
            logger.warning("Ignoring unknown weekday %r in schedule", key)
            continue
        if not isinstance(entry, Mapping):
            continue
        out[weekday] = DaySchedule(
            start=_optional_time(entry.get("start"), f"schedule.{weekday.value}.start"),
            end=_optional_time(entry.get("end"), f"schedule.{weekday.value}.end"),
            closed=bool(entry.get("closed", False)),
        )
    return out


def _special_dates(raw: Any) -> Tuple[SpecialDate, ...]:
    entries = _decode_json(raw, "special_hours")
    if not isinstance(entries, list):
        return ()
    out = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        day = _optional_date(entry.get("date"), "special_hours.date")
        open_time = _optional_time(entry.get("openTime", entry.get("open_time")), "special_hours.openTime")
        close_time = _optional_time(entry.get("closeTime", entry.get("close_time")), "special_hours.closeTime")
        if day is None or open_time is None or close_time is None:
            continue
        out.append(SpecialDate(date=day, open_time=open_time, close_time=close_time, reason=entry.get("reason")))
    return tuple(out)


def normalize_schedule(row: Mapping[str, Any]) -> OrganizationSchedule:
    org_id = row.get("organisation_uid", row.get("organization_id"))
    return OrganizationSchedule(
        organization_id=int(org_id) if org_id is not None else None,
        weekly_working_days=_weekly_days(row.get("weekly_schedule")),
        per_day_schedule=_per_day(row.get("schedule")),
        special_dates=_special_dates(row.get("special_hours")),
        default_open_time=_optional_time(row.get("open_time"), "open_time") or DEFAULT_OPEN_TIME,
        default_close_time=_optional_time(row.get("close_time"), "close_time") or DEFAULT_CLOSE_TIME,
        holiday_mode=bool(row.get("holiday_mode") or False),
        holiday_until=_optional_date(row.get("holiday_until"), "holiday_until"),
        timezone=row.get("timezone") or None,
    )
