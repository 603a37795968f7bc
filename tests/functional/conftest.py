"""Functional test bootstrap.

Points the app at a file-backed SQLite database under ``tmp/`` before any
``dashboard`` module is imported, applies the SQLite migrations once per
session and empties the customers table before every test.
"""

from __future__ import annotations

import os
import pathlib
from typing import Iterator

import pytest

from support import OWNER_EMAIL, OWNER_PASSWORD, register_form

_ROOT = pathlib.Path(__file__).resolve().parents[2]
_DB_FILE = _ROOT / "tmp" / "functional_tests.db"
_DB_FILE.parent.mkdir(parents=True, exist_ok=True)
if _DB_FILE.exists():
    _DB_FILE.unlink()

os.environ["TEST_DATABASE_URL"] = f"sqlite:///{_DB_FILE}"
os.environ["DATABASE_URL"] = os.environ["TEST_DATABASE_URL"]
# Migrations are applied explicitly below, not on app startup
os.environ["AUTO_APPLY_MIGRATIONS"] = "0"
os.environ.setdefault("JWT_SECRET", "functional-test-secret")
os.environ.pop("APP_ENV", None)


@pytest.fixture(scope="session", autouse=True)
def functional_sqlite_bootstrap() -> Iterator[None]:
    from dashboard.config import reset_config
    from dashboard.db.base import get_engine
    from dashboard.db.migrations_runner import apply_migrations
    from dashboard.logic.auth import register_user
    from dashboard.models.auth import RegisterRequest

    reset_config()
    engine = get_engine(os.environ["TEST_DATABASE_URL"])
    apply_migrations(engine, migrations_dir=str(_ROOT / "sqlite_migrations"))
    register_user(RegisterRequest(**register_form(OWNER_EMAIL)))
    yield
    engine.dispose()


@pytest.fixture(autouse=True)
def empty_customers() -> None:
    from sqlalchemy import text as sql_text

    from dashboard.db.base import transaction_scope

    with transaction_scope() as conn:
        conn.execute(sql_text("DELETE FROM customers"))


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def app():
    from dashboard.main import create_app

    return create_app()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_client(client):
    resp = client.post("/api/auth/login", json={"email": OWNER_EMAIL, "password": OWNER_PASSWORD})
    assert resp.status_code == 200, resp.text
    return client
