"""User data access helpers."""

from __future__ import annotations

from typing import Any, Dict

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection

from dashboard.db.base import get_engine

_PUBLIC_COLUMNS = "id, email, first_name, last_name, company, address, city, state, country, zip, phone, about, created_at"


def get_user_by_email(email: str) -> Dict[str, Any] | None:
    """Return the user row including ``password_hash`` or None."""
    eng = get_engine()
    with eng.connect() as conn:
        row = conn.execute(
            sql_text(f"SELECT {_PUBLIC_COLUMNS}, password_hash FROM users WHERE email = :email"),
            {"email": email},
        ).mappings().first()
    return dict(row) if row else None


def get_user_by_id(user_id: int) -> Dict[str, Any] | None:
    eng = get_engine()
    with eng.connect() as conn:
        row = conn.execute(
            sql_text(f"SELECT {_PUBLIC_COLUMNS} FROM users WHERE id = :id"),
            {"id": int(user_id)},
        ).mappings().first()
    return dict(row) if row else None


def email_exists(conn: Connection, email: str) -> bool:
    row = conn.execute(sql_text("SELECT 1 FROM users WHERE email = :email"), {"email": email}).fetchone()
    return row is not None


def insert_user(conn: Connection, values: Dict[str, Any]) -> int:
    """Insert a user on the caller's transaction and return its id."""
    row = conn.execute(
        sql_text(
            """
            INSERT INTO users
                (email, password_hash, first_name, last_name, company, address,
                 city, state, country, zip, phone, about)
            VALUES
                (:email, :password_hash, :first_name, :last_name, :company, :address,
                 :city, :state, :country, :zip, :phone, :about)
            RETURNING id
            """
        ),
        values,
    ).fetchone()
    return int(row[0])
