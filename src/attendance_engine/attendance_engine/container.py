from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLShiftRecordRepository
from .attendance.service import TimeAccountingService
from .common.datetime_utils import Clock
from .core.constants import DEFAULT_GRACE_MINUTES, DEFAULT_STANDARD_MINUTES, SCHEDULE_CACHE_TTL_SECONDS
from .database.connection import DatabaseConnection, DBConfig
from .reports.service import AttendanceMetricsService
from .schedules.cache import Timer, TTLCache
from .schedules.mysql_schedule_repository import MySQLOrganizationScheduleRepository
from .schedules.service import ScheduleService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    schedules_repo: MySQLOrganizationScheduleRepository
    shifts_repo: MySQLShiftRecordRepository

    schedule_service: ScheduleService
    accounting_service: TimeAccountingService
    metrics_service: AttendanceMetricsService


def build_container(
    *,
    db_config: dict,
    grace_minutes: int = DEFAULT_GRACE_MINUTES,
    standard_minutes: int = DEFAULT_STANDARD_MINUTES,
    cache_ttl_seconds: float = SCHEDULE_CACHE_TTL_SECONDS,
    default_timezone: str = "UTC",
    clock: Optional[Clock] = None,
    timer: Optional[Timer] = None,
) -> Container:
    config = DBConfig(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config["database"]),
        connect_timeout=int(db_config.get("connect_timeout", 10)),
    )
    conn = DatabaseConnection.get_instance(config)

    schedules_repo = MySQLOrganizationScheduleRepository(conn)
    shifts_repo = MySQLShiftRecordRepository(conn, default_timezone=default_timezone)

    schedule_service = ScheduleService(schedules_repo, cache=TTLCache(cache_ttl_seconds, timer=timer))
    accounting_service = TimeAccountingService(
        schedule_service,
        clock=clock,
        grace_minutes=grace_minutes,
        standard_minutes=standard_minutes,
    )
    metrics_service = AttendanceMetricsService(shifts_repo, accounting_service)

    return Container(
        conn=conn,
        schedules_repo=schedules_repo,
        shifts_repo=shifts_repo,
        schedule_service=schedule_service,
        accounting_service=accounting_service,
        metrics_service=metrics_service,
    )
