from __future__ import annotations

import pytest

from attendance_engine import main
from attendance_engine.container import build_container
from attendance_engine.core.exceptions import ConfigurationError
from attendance_engine.database import connection
from attendance_engine.database.connection import DatabaseConnection, DBConfig
from config import get_settings_module


@pytest.fixture(autouse=True)
def reset_connection():
    DatabaseConnection.reset_instance()
    yield
    DatabaseConnection.reset_instance()


def test_settings_module_follows_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    assert get_settings_module() == "config.testing"

    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "config.development"


def test_build_container_fills_db_config_defaults():
    container = build_container(db_config={"host": "db", "port": "3307", "database": "attendance"})
    cfg = container.conn.config

    assert (cfg.host, cfg.port, cfg.user, cfg.database, cfg.connect_timeout) == ("db", 3307, "root", "attendance", 10)


def test_connections_use_utc_read_only_sessions(monkeypatch):
    seen = {}
    monkeypatch.setattr(connection.mysql.connector, "connect", lambda **kwargs: seen.update(kwargs) or "conn")
    db = DatabaseConnection(DBConfig(host="db", port=3306, user="u", password="p", database="attendance"))

    assert db.connect() == "conn"
    assert seen["time_zone"] == "+00:00"
    assert seen["autocommit"] is True
    assert seen["connection_timeout"] == 10


def test_build_container_wires_services():
    container = build_container(db_config={"host": "db", "database": "attendance"}, grace_minutes=10, standard_minutes=450)

    assert container.accounting_service.grace_minutes == 10
    assert container.metrics_service is not None
    assert container.conn is DatabaseConnection.get_instance(DBConfig("x", 1, "x", "x", "x"))


def test_create_container_from_testing_settings(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    container = main.create_container()

    assert container.accounting_service.grace_minutes == 15


def test_unknown_settings_module_is_a_configuration_error(monkeypatch):
    monkeypatch.setattr(main, "get_settings_module", lambda: "config.nowhere")

    with pytest.raises(ConfigurationError):
        main.create_container()
