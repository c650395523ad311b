"""Shared fixtures: an in-memory SQLite store and a FastAPI test client."""

from __future__ import annotations

import os

# Settings are resolved at import time, so the environment must be ready first.
os.environ["NUMS_ENV"] = "test"
os.environ["NUMS_ENV_FILE"] = os.path.join(os.path.dirname(__file__), "missing.env")
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-key-with-at-least-32-bytes!!"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
os.environ["DB_RECONNECT_ENABLED"] = "false"
os.environ["GAME_RECENT_THRESHOLD_DAYS"] = "7"

import pytest
from fastapi.testclient import TestClient

from nums_api.core.db import Base, get_engine, init_database
from nums_api.core.db_status import DatabaseStatus
from nums_api.main import app
from nums_api.services.admin import grant_admin
from nums_api.services.themes import REQUIRED_COLORS, create_theme


def build_row(round_no: int, draw_date: str = "2024.01.06") -> str:
    return "\t".join(
        [
            str(round_no),
            draw_date,
            "12",
            "2,345,678,901원",
            "65",
            "72,345,678원",
            "2,850",
            "1,623,456원",
            "142,310",
            "50,000원",
            "2,365,120",
            "5,000원",
            "3",
            "11",
            "19",
            "25",
            "33",
            "41",
            "7",
        ]
    )


@pytest.fixture(autouse=True)
def database():
    init_database()
    DatabaseStatus.set_connected(True)
    yield get_engine()
    Base.metadata.drop_all(bind=get_engine())
    DatabaseStatus.reset()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def row():
    return build_row


@pytest.fixture
def colors() -> dict:
    return {name: "#1A2B3C" for name in REQUIRED_COLORS}


@pytest.fixture
def register(client):
    """Register + login, returning ``(user_id, headers)``."""

    def _register(username: str = "alice123", password: str = "secret1"):
        created = client.post(
            "/api/users/register",
            json={"username": username, "password": password},
        )
        assert created.status_code == 201, created.json()
        login = client.post(
            "/api/users/login",
            json={"username": username, "password": password},
        )
        assert login.status_code == 200, login.json()
        token = login.json()["token"]
        return created.json()["user"]["user_id"], {"Authorization": f"Bearer {token}"}

    return _register


@pytest.fixture
def admin_headers(register) -> dict:
    _, headers = register("admin_user", "adminpw1")
    grant_admin("admin_user", role="super_admin", permissions=["game_manage"])
    return headers


@pytest.fixture
def default_theme(colors):
    return create_theme(name="light", mode="light", colors=colors, is_default=True)
