"""Shared builders and database helpers for the functional tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from jsonschema import Draft202012Validator

OWNER_EMAIL = "owner@example.com"
OWNER_PASSWORD = "secret123"


def register_form(email: str, password: str = OWNER_PASSWORD) -> Dict[str, Any]:
    return {
        "email": email,
        "password": password,
        "firstname": "Olive",
        "lastname": "Owner",
        "company": "Acme Corp",
        "address": "1 Main Street",
        "city": "Pune",
        "state": "Maharashtra",
        "country": "India",
        "zip": "411001",
        "phone": "+91-555-0100",
        "about": "Runs the dashboard",
    }


def customer_form(**overrides: Any) -> Dict[str, Any]:
    form = {
        "email": "jane@example.com",
        "firstname": "Jane",
        "lastname": "Doe",
        "company": "Globex",
        "address": "42 Side Road",
        "city": "Austin",
        "state": "Texas",
        "country": "USA",
        "zip": "733301",
    }
    form.update(overrides)
    return form


def insert_customers(*names: str) -> list[int]:
    """Insert one customer per first name, in order; returns their ids."""
    from dashboard.logic.repository_customers import insert_customer

    ids = []
    for name in names:
        ids.append(
            insert_customer(
                {
                    "first_name": name,
                    "last_name": "Test",
                    "email": f"{name.lower()}@example.com",
                    "company": f"{name} Ltd",
                }
            )
        )
    return ids


def sort_orders() -> Dict[int, int]:
    from sqlalchemy import text as sql_text

    from dashboard.db.base import get_engine

    with get_engine().connect() as conn:
        rows = conn.execute(sql_text("SELECT id, sort_order FROM customers")).fetchall()
    return {int(r[0]): int(r[1]) for r in rows}


SCHEMAS_DIR = Path(__file__).resolve().parents[2] / "schemas"


def assert_matches_schema(name: str, instance: Any) -> None:
    """Validate ``instance`` against ``schemas/<name>.schema.json``."""
    schema = json.loads((SCHEMAS_DIR / f"{name}.schema.json").read_text(encoding="utf-8"))
    Draft202012Validator(schema).validate(instance)
