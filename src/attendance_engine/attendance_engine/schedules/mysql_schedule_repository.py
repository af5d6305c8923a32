from __future__ import annotations

from typing import Optional

from ..core.exceptions import ScheduleNotFoundError
from ..database.mysql_base import ConnectionFactory, db_cursor, fetchone
from .model import OrganizationSchedule
from .normalizer import normalize_schedule
from .repository import OrganizationScheduleRepository


class MySQLOrganizationScheduleRepository(OrganizationScheduleRepository):
    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def get_organization_schedule(self, organization_id: int) -> Optional[OrganizationSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    oh.organisationUid AS organisation_uid,
                    oh.openTime AS open_time,
                    oh.closeTime AS close_time,
                    oh.weeklySchedule AS weekly_schedule,
                    oh.schedule AS schedule,
                    oh.specialHours AS special_hours,
                    oh.timezone AS timezone,
                    oh.holidayMode AS holiday_mode,
                    oh.holidayUntil AS holiday_until
                FROM organisation_hours oh
                WHERE oh.organisationUid=%s AND oh.isDeleted=0
                ORDER BY oh.uid ASC
                LIMIT 1
                """,
                (int(organization_id),),
            )
            r = fetchone(cur)
            if r:
                return normalize_schedule(r)

            # No hours row: distinguish "not configured" from "no such organization".
            cur.execute("SELECT uid FROM organisation WHERE uid=%s", (int(organization_id),))
            if not fetchone(cur):
                raise ScheduleNotFoundError(int(organization_id))
            return None
