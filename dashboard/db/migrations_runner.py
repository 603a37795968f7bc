"""Lightweight SQL migrations runner.

Applies .sql files in lexical order from a migrations directory (PostgreSQL
files under `migrations/`, SQLite files under `sqlite_migrations/`). Skips
rollback files and records applied filenames in a `schema_migrations` table
of the target database, so the same directory can be applied to many
databases without reapplying a file to any one of them.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

# Checkout root holding migrations/ and sqlite_migrations/
PROJECT_ROOT = Path(__file__).resolve().parents[2]

_JOURNAL_DDL = (
    "CREATE TABLE IF NOT EXISTS schema_migrations ("
    "filename VARCHAR(255) PRIMARY KEY, "
    "applied_at VARCHAR(32) NOT NULL)"
)


def _iter_sql_files(root: Path) -> Iterable[Path]:
    for p in sorted(root.glob("*.sql")):
        if "rollback" in p.name.lower():
            continue
        yield p


def _exec_sql_compat(conn: Connection, sql: str) -> None:
    """Execute SQL text, tolerating multi-statement files on SQLite.

    pysqlite does not allow multiple statements in a single execute() call,
    so SQLite scripts are split on ';' with comments and explicit
    transaction statements dropped (the runner already holds a transaction).
    Other dialects receive the full script as-is.
    """
    name = (getattr(conn.dialect, "name", "") or "").lower()
    if "sqlite" not in name:
        conn.exec_driver_sql(sql)
        return
    for stmt in sql.split(";"):
        lines = [ln for ln in stmt.splitlines() if not ln.strip().startswith("--")]
        s = "\n".join(lines).strip()
        if not s:
            continue
        if s.upper() in {"BEGIN", "COMMIT", "END"}:
            continue
        conn.exec_driver_sql(s)


def _applied_filenames(conn: Connection) -> set[str]:
    conn.execute(sql_text(_JOURNAL_DDL))
    rows = conn.execute(sql_text("SELECT filename FROM schema_migrations")).fetchall()
    return {str(r[0]) for r in rows}


def migrations_dir_for(dialect: str) -> Path:
    return PROJECT_ROOT / ("sqlite_migrations" if dialect == "sqlite" else "migrations")


def apply_migrations(engine: Engine, migrations_dir: str | os.PathLike[str] | None = None) -> list[str]:
    """Apply pending migrations and return the filenames applied this run.

    ``migrations_dir`` defaults to the directory for the engine's dialect
    under the project root, independent of the working directory.
    """
    root = Path(migrations_dir) if migrations_dir is not None else migrations_dir_for(engine.dialect.name)
    if not root.exists():
        logger.warning("migrations_dir_missing path=%s", str(root))
        return []

    applied_now: list[str] = []
    with engine.begin() as conn:
        applied = _applied_filenames(conn)
        for sql_path in _iter_sql_files(root):
            fname = sql_path.name
            if fname in applied:
                continue
            sql = sql_path.read_text(encoding="utf-8")
            if not sql.strip():
                continue
            _exec_sql_compat(conn, sql)
            conn.execute(
                sql_text("INSERT INTO schema_migrations (filename, applied_at) VALUES (:f, :at)"),
                {
                    "f": fname,
                    # ISO-8601 UTC without fractional seconds
                    "at": datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z"),
                },
            )
            applied_now.append(fname)
            logger.info("migration_applied file=%s", fname)
    return applied_now


__all__ = ["PROJECT_ROOT", "apply_migrations", "migrations_dir_for"]
