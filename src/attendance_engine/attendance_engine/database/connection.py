from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector

# Stored timestamps are UTC; the session zone keeps MySQL from shifting them.
SESSION_TIME_ZONE = "+00:00"


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 10


class DatabaseConnection:
    """Process-wide source of short-lived, read-only MySQL connections.

    The engine only reads attendance and organisation hours, so sessions run
    in autocommit with the UTC session zone and are closed after each query.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = cls(config)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        cls._instance = None

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=self._config.port,
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=self._config.connect_timeout,
            time_zone=SESSION_TIME_ZONE,
            autocommit=True,
        )
