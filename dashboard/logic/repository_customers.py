"""Customer data access helpers.

Listing reads default to ``sort_order ASC, id ASC``. Inserts assign the next
ordinal; updates from the edit form never touch ``sort_order`` (only the
reorder flow in ``order_sequences`` does).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from sqlalchemy import text as sql_text

from dashboard.db.base import fits_integer_column, get_engine, transaction_scope
from dashboard.logic.listing import LIKE_ESCAPE, ListQuery
from dashboard.logic.order_sequences import next_sort_order

logger = logging.getLogger(__name__)

CUSTOMER_COLUMNS: Tuple[str, ...] = (
    "id",
    "user_id",
    "first_name",
    "last_name",
    "email",
    "company",
    "address",
    "city",
    "state",
    "zip",
    "country",
    "phone",
    "mobile",
    "shipping_firstname",
    "shipping_lastname",
    "shipping_company",
    "shipping_address",
    "shipping_city",
    "shipping_state",
    "shipping_zip",
    "shipping_country",
    "shipping_phone",
    "shipping_mobile",
    "sendinvoice",
    "conformance",
    "terms",
    "freight",
    "note",
    "about",
    "sort_order",
    "created_at",
)
_SELECT_COLUMNS = ", ".join(CUSTOMER_COLUMNS)
# Columns written by the create/edit form (never id, sort_order or created_at)
WRITABLE_COLUMNS: Tuple[str, ...] = tuple(
    c for c in CUSTOMER_COLUMNS if c not in {"id", "user_id", "sort_order", "created_at", "about"}
)

_SEARCH_CLAUSE = (
    "WHERE (LOWER(first_name) LIKE LOWER(:term) ESCAPE '" + LIKE_ESCAPE + "'"
    " OR LOWER(last_name) LIKE LOWER(:term) ESCAPE '" + LIKE_ESCAPE + "'"
    " OR LOWER(email) LIKE LOWER(:term) ESCAPE '" + LIKE_ESCAPE + "'"
    " OR LOWER(company) LIKE LOWER(:term) ESCAPE '" + LIKE_ESCAPE + "')"
)


def list_customers(query: ListQuery) -> Tuple[List[Dict[str, Any]], int]:
    """Return one page of customers and the total matching count.

    ``query.order_by_clause()`` only emits whitelisted identifiers, so it is
    the one piece of SQL text not covered by bound parameters.
    """
    where = _SEARCH_CLAUSE if query.search else ""
    params: Dict[str, Any] = {"limit": query.limit, "offset": query.offset}
    if query.search:
        params["term"] = query.search_pattern

    eng = get_engine()
    with eng.connect() as conn:
        rows = conn.execute(
            sql_text(
                f"SELECT {_SELECT_COLUMNS} FROM customers {where} "
                f"ORDER BY {query.order_by_clause()} LIMIT :limit OFFSET :offset"
            ),
            params,
        ).mappings().all()
        total = conn.execute(
            sql_text(f"SELECT COUNT(*) FROM customers {where}"),
            {k: v for k, v in params.items() if k == "term"},
        ).scalar()
    return [dict(r) for r in rows], int(total or 0)


def get_customer(customer_id: int) -> Dict[str, Any] | None:
    if not fits_integer_column(customer_id):
        return None
    eng = get_engine()
    with eng.connect() as conn:
        row = conn.execute(
            sql_text(f"SELECT {_SELECT_COLUMNS} FROM customers WHERE id = :id"),
            {"id": int(customer_id)},
        ).mappings().first()
    return dict(row) if row else None


def insert_customer(values: Dict[str, Any], *, password_hash: str | None = None, user_id: int | None = None) -> int:
    """Insert a customer at the end of the default order and return its id."""
    cols = [c for c in WRITABLE_COLUMNS if c in values]
    params = {c: values[c] for c in cols}
    params.update({"password_hash": password_hash, "user_id": user_id})
    insert_cols = cols + ["password_hash", "user_id", "sort_order"]
    with transaction_scope() as conn:
        params["sort_order"] = next_sort_order(conn)
        row = conn.execute(
            sql_text(
                f"INSERT INTO customers ({', '.join(insert_cols)}) "
                f"VALUES ({', '.join(':' + c for c in insert_cols)}) RETURNING id"
            ),
            params,
        ).fetchone()
    customer_id = int(row[0])
    logger.info("customers.inserted", extra={"customer_id": customer_id, "sort_order": params["sort_order"]})
    return customer_id


def update_customer(customer_id: int, values: Dict[str, Any], *, password_hash: str | None = None) -> bool:
    """Update form columns; returns False when the customer does not exist.

    The stored password hash is only replaced when a new one is supplied.
    """
    if not fits_integer_column(customer_id):
        return False
    cols = [c for c in WRITABLE_COLUMNS if c in values]
    params: Dict[str, Any] = {c: values[c] for c in cols}
    if password_hash is not None:
        cols.append("password_hash")
        params["password_hash"] = password_hash
    params["id"] = int(customer_id)
    if not cols:
        return get_customer(customer_id) is not None
    with transaction_scope() as conn:
        result = conn.execute(
            sql_text(f"UPDATE customers SET {', '.join(c + ' = :' + c for c in cols)} WHERE id = :id"),
            params,
        )
        updated = result.rowcount
    logger.info("customers.updated", extra={"customer_id": customer_id, "rows": updated})
    return updated == 1


__all__ = [
    "CUSTOMER_COLUMNS",
    "WRITABLE_COLUMNS",
    "get_customer",
    "insert_customer",
    "list_customers",
    "update_customer",
]
