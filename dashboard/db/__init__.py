"""Database bootstrap utilities for the customer dashboard.

Exposes engine construction, a transaction scope helper and the SQL
migrations runner that applies files from the local migrations/ directory.
The DB layer does not leak ORM models into route handlers.
"""

from dashboard.db.base import get_engine, transaction_scope
from dashboard.db.migrations_runner import apply_migrations

__all__ = [
    "get_engine",
    "transaction_scope",
    "apply_migrations",
]
