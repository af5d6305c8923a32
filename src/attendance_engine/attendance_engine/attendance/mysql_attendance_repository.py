from __future__ import annotations

import json
import logging
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..breaks.model import BreakInterval
from ..common.datetime_utils import to_organization_time
from ..database.mysql_base import ConnectionFactory, db_cursor, fetchall
from .model import ShiftRecord
from .repository import ShiftRecordRepository

logger = logging.getLogger(__name__)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Ignoring malformed break timestamp %r", value)
        return None


def parse_break_details(raw: Any) -> List[Tuple[datetime, Optional[datetime]]]:
    """Decode the `breakDetails` JSON column into (start, end) pairs.

    Entries without a readable start time are skipped.
    """

    if raw is None or raw == "":
        return []
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed breakDetails JSON")
            return []
    if not isinstance(raw, list):
        return []

    out: List[Tuple[datetime, Optional[datetime]]] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        start = _parse_timestamp(entry.get("startTime"))
        if start is None:
            continue
        out.append((start, _parse_timestamp(entry.get("endTime"))))
    return out


class MySQLShiftRecordRepository(ShiftRecordRepository):
    """Reads attendance rows and converts stored UTC timestamps to org-local time."""

    def __init__(self, conn_factory: ConnectionFactory, *, default_timezone: str = "UTC"):
        self._conn_factory = conn_factory
        self._default_timezone = default_timezone

    def _local(self, value: Optional[datetime], tz_name: Optional[str]) -> Optional[datetime]:
        if value is None:
            return None
        return to_organization_time(value, tz_name, fallback_tz=self._default_timezone)

    def _to_record(self, r: Dict[str, Any]) -> ShiftRecord:
        tz_name = r.get("timezone")
        breaks = tuple(
            BreakInterval(start_time=self._local(start, tz_name), end_time=self._local(end, tz_name))
            for start, end in parse_break_details(r.get("break_details"))
        )
        org_id = r.get("organisation_uid")
        return ShiftRecord(
            record_id=int(r["uid"]),
            user_id=int(r["owner_uid"]),
            organization_id=int(org_id) if org_id is not None else None,
            check_in=self._local(r["check_in"], tz_name),
            check_out=self._local(r.get("check_out"), tz_name),
            break_intervals=breaks,
            legacy_total_break_duration=r.get("total_break_time") or None,
        )

    def list_for_user(self, *, user_id: int, start_date: date, end_date: date) -> Sequence[ShiftRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    a.uid,
                    a.ownerUid AS owner_uid,
                    a.organisationUid AS organisation_uid,
                    a.checkIn AS check_in,
                    a.checkOut AS check_out,
                    a.breakDetails AS break_details,
                    a.totalBreakTime AS total_break_time,
                    oh.timezone AS timezone
                FROM attendance a
                LEFT JOIN (
                    SELECT organisationUid, MIN(uid) AS uid
                    FROM organisation_hours
                    WHERE isDeleted = 0
                    GROUP BY organisationUid
                ) first_oh ON first_oh.organisationUid = a.organisationUid
                LEFT JOIN organisation_hours oh ON oh.uid = first_oh.uid
                WHERE a.ownerUid=%s AND a.checkIn >= %s AND a.checkIn < %s
                ORDER BY a.checkIn ASC
                """,
                (int(user_id), start_date, end_date + timedelta(days=1)),
            )
            rows = fetchall(cur)

        # One record per attendance row even if the hours join repeats it.
        records: Dict[int, ShiftRecord] = {}
        for r in rows:
            if int(r["uid"]) not in records:
                records[int(r["uid"])] = self._to_record(r)
        return list(records.values())
