import os

import pytest

from nums_api.core.config import FALLBACK_JWT_SECRET, Settings, validate_settings
from nums_api.core.db_status import DatabaseStatus
from nums_api.core.env_loader import load_env_file, parse_env_line


def test_health_reports_store_state(client):
    body = client.get("/api/health").json()
    assert body["success"] is True
    assert body["database"]["status"] == "connected"

    DatabaseStatus.set_connected(False)
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["database"]["status"] == "disconnected"


def test_storage_probe(client):
    body = client.get("/api/storage").json()

    assert body["connected"] is True
    assert body["backend"] == "sqlite"
    assert body["total_draws"] == 0


def test_store_routes_short_circuit_while_disconnected(client):
    DatabaseStatus.set_connected(False)

    response = client.get("/api/games")

    assert response.status_code == 503
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Database Unavailable"


def test_check_recovers_connection_flag():
    DatabaseStatus.set_connected(False)

    assert DatabaseStatus.check() is True
    assert DatabaseStatus.is_connected() is True


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "message": "Route not found",
        "errorCode": "ROUTE_NOT_FOUND",
    }


def test_fallback_secret_is_fatal_only_in_production():
    validate_settings(Settings(app_env="development", jwt_secret_key=FALLBACK_JWT_SECRET))

    with pytest.raises(RuntimeError):
        validate_settings(Settings(app_env="production", jwt_secret_key=FALLBACK_JWT_SECRET))

    validate_settings(Settings(app_env="production", jwt_secret_key="x" * 40))


def test_database_dsn_prefers_explicit_url():
    assert Settings(database_url="sqlite://").database_dsn == "sqlite://"

    dsn = Settings(
        database_url="",
        mariadb_user="nums",
        mariadb_password="p@ss",
        mariadb_host="db",
        mariadb_port=3307,
        mariadb_db_name="nums_db",
    ).database_dsn
    assert dsn == "mysql+pymysql://nums:p%40ss@db:3307/nums_db"


@pytest.mark.parametrize(
    "line, expected",
    [
        ("KEY=value", ("KEY", "value")),
        ("export KEY='quoted # kept'", ("KEY", "quoted # kept")),
        ("KEY=value # comment", ("KEY", "value")),
        ("# comment", None),
        ("", None),
        ("NOVALUE", None),
    ],
)
def test_parse_env_line(line, expected):
    assert parse_env_line(line) == expected


def test_load_env_file_does_not_override(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("NUMS_TEST_A=from-file\nNUMS_TEST_B=from-file\n", encoding="utf-8")
    monkeypatch.setenv("NUMS_TEST_A", "from-env")
    monkeypatch.delenv("NUMS_TEST_B", raising=False)

    assert load_env_file(env_file) == 1

    assert os.environ["NUMS_TEST_A"] == "from-env"
    assert os.environ["NUMS_TEST_B"] == "from-file"
    monkeypatch.delenv("NUMS_TEST_B")
