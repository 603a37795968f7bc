"""SQLAlchemy engine and connection scopes.

The service targets PostgreSQL in production but supports SQLite for local
development and CI. No declarative models are defined here; repositories
issue bound SQL through ``sqlalchemy.text`` and this module only manages
connection lifecycle.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import StaticPool

from dashboard.config import get_config

logger = logging.getLogger(__name__)

# Range of the INTEGER columns (id, sort_order); PostgreSQL INTEGER is 32-bit
SQL_INT_MIN = -(2**31)
SQL_INT_MAX = 2**31 - 1


def fits_integer_column(value: int) -> bool:
    return SQL_INT_MIN <= value <= SQL_INT_MAX


def _db_url() -> str:
    return get_config().database.dsn


# Module-level cached Engine so repositories share one connection pool
_ENGINE: Engine | None = None
_ENGINE_URL: str | None = None


def get_engine(url: str | None = None) -> Engine:
    """Return a singleton SQLAlchemy Engine for the given URL.

    For SQLite in-memory URLs, use a StaticPool to keep a single connection
    alive across sessions and threads during tests.
    """
    global _ENGINE, _ENGINE_URL
    resolved_url = url or _db_url()

    if _ENGINE is None or _ENGINE_URL != resolved_url:
        kwargs: dict = {"future": True, "pool_pre_ping": True}
        if resolved_url.startswith("sqlite"):
            # Route handlers run in a threadpool
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in resolved_url:
                kwargs["poolclass"] = StaticPool
        if _ENGINE is not None:
            _ENGINE.dispose()
        _ENGINE = create_engine(resolved_url, **kwargs)
        _ENGINE_URL = resolved_url
        logger.info("db.engine_created dialect=%s", _ENGINE.dialect.name)

    return _ENGINE


@contextmanager
def transaction_scope(engine: Engine | None = None) -> Iterator[Connection]:
    """Yield a connection inside a transaction.

    Commits on normal exit; rolls back and re-raises on any exception. The
    connection is returned to the pool on every exit path.
    """
    eng = engine or get_engine()
    with eng.connect() as conn:
        trans = conn.begin()
        try:
            yield conn
            trans.commit()
        except Exception:
            trans.rollback()
            logger.warning("db.transaction_rolled_back", exc_info=True)
            raise
