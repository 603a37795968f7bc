"""Behave environment hooks for the customer dashboard integration tests.

Loads ``.env.test`` (project root or tests/integration/) via python-dotenv,
then requires ``TEST_BASE_URL`` and ``TEST_DATABASE_URL``. When the base URL
points at localhost and no API answers there, a Uvicorn server is started
on a free port for the duration of the run. Pending migrations are applied
to the test database before the first feature.
"""

from __future__ import annotations

import os
import socket
import subprocess
import sys
import time
from typing import Any
from urllib.parse import urlparse

import httpx
from dotenv import load_dotenv
from sqlalchemy import create_engine, text

REQUIRED_ENV_VARS = (
    "TEST_BASE_URL",  # Base URL for the running API under test
    "TEST_DATABASE_URL",  # Database the API under test writes to
)


def _load_env() -> None:
    # Explicit environment always wins over file values
    load_dotenv(".env.test", override=False)
    load_dotenv(os.path.join("tests", "integration", ".env.test"), override=False)


def _is_api_listening(base_url: str) -> bool:
    try:
        with httpx.Client(timeout=2.0) as client:
            client.get(base_url + "/health")
        return True
    except httpx.HTTPError:
        return False


def _choose_free_port(host: str) -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind((host, 0))
        return int(s.getsockname()[1])


def _mask_dsn(dsn: str) -> str:
    parsed = urlparse(dsn)
    if parsed.password:
        return dsn.replace(parsed.password, "***")
    return dsn


def _apply_migrations(dsn: str) -> None:
    from dashboard.db.base import get_engine
    from dashboard.db.migrations_runner import apply_migrations

    applied = apply_migrations(get_engine(dsn))
    if applied:
        print(f"[env] applied migrations: {', '.join(applied)}")


def _start_local_api(context: Any, host: str) -> None:
    port = _choose_free_port(host)
    context.test_base_url = f"http://{host}:{port}"
    os.environ["TEST_BASE_URL"] = context.test_base_url
    context._api_proc = subprocess.Popen(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "dashboard.main:create_app",
            "--factory",
            "--host",
            host,
            "--port",
            str(port),
            "--log-level",
            "warning",
        ],
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        env=os.environ.copy(),
    )
    deadline = time.time() + 10.0
    while time.time() < deadline:
        if _is_api_listening(context.test_base_url):
            return
        time.sleep(0.2)
    raise AssertionError(f"Local API did not start at {context.test_base_url}")


def before_all(context: Any) -> None:  # pragma: no cover - executed by Behave
    _load_env()
    missing = [name for name in REQUIRED_ENV_VARS if not os.getenv(name)]
    assert not missing, "Missing required environment variables: " + ", ".join(missing)

    context.test_base_url = os.environ["TEST_BASE_URL"].rstrip("/")
    context.test_database_url = os.environ["TEST_DATABASE_URL"]
    context._api_proc = None
    # The API under test must write to the same database the steps inspect
    os.environ.setdefault("DATABASE_URL", context.test_database_url)

    try:
        eng = create_engine(context.test_database_url, future=True)
        with eng.connect() as conn:
            conn.execute(text("SELECT 1"))
        eng.dispose()
    except Exception as exc:
        raise AssertionError(
            f"Database not reachable using TEST_DATABASE_URL={_mask_dsn(context.test_database_url)}: {exc}"
        ) from exc
    _apply_migrations(context.test_database_url)

    parsed = urlparse(context.test_base_url)
    if not _is_api_listening(context.test_base_url):
        if parsed.hostname in {"localhost", "127.0.0.1"}:
            _start_local_api(context, parsed.hostname)
        else:
            raise AssertionError(f"API not reachable at TEST_BASE_URL={context.test_base_url}")


def before_scenario(context: Any, scenario: Any) -> None:  # pragma: no cover
    context.http = httpx.Client(base_url=context.test_base_url, timeout=10.0)
    context.customers = {}
    context.response = None


def after_scenario(context: Any, scenario: Any) -> None:  # pragma: no cover
    http = getattr(context, "http", None)
    if http is not None:
        http.close()


def after_all(context: Any) -> None:  # pragma: no cover
    proc = getattr(context, "_api_proc", None)
    if proc is not None:
        proc.terminate()
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()
