"""Customer ordinal (``sort_order``) assignment.

Single source of truth for writing ``customers.sort_order``: the default
ordinal for new rows and batch reassignment from a drag-and-drop reorder.
A reorder batch is validated before any database access and then applied
all-or-nothing inside one transaction.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple
import logging

from sqlalchemy import bindparam, text as sql_text
from sqlalchemy.engine import Connection

from dashboard.db.base import fits_integer_column, transaction_scope
from dashboard.errors import InvalidRequest, PartialUpdate

logger = logging.getLogger(__name__)

# (customer id, new ordinal)
OrdinalPair = Tuple[int, int]

_UPDATE_ORDINAL = sql_text("UPDATE customers SET sort_order = :sort_order WHERE id = :id")
_READ_ORDINALS = sql_text("SELECT id, sort_order FROM customers WHERE id IN :ids").bindparams(
    bindparam("ids", expanding=True)
)


def _as_int(value: Any) -> int | None:
    """Return ``value`` as an int when it is a JSON integer, else None.

    JSON booleans decode to ``bool`` (an ``int`` subclass) and are rejected;
    integral floats such as ``3.0`` are accepted.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def validate_reorder_batch(payload: Any) -> List[OrdinalPair]:
    """Validate a reorder request body and return ``(id, ordinal)`` pairs.

    The body must be a non-empty JSON array of ``{"id": int, "order": int}``
    objects with unique ids, both values within the INTEGER column range.
    Raises ``InvalidRequest`` otherwise.
    """
    if not isinstance(payload, list):
        raise InvalidRequest("Reorder payload must be a JSON array of {id, order} objects")
    if not payload:
        raise InvalidRequest("Reorder payload must not be empty")

    pairs: List[OrdinalPair] = []
    seen: set[int] = set()
    for idx, item in enumerate(payload):
        if not isinstance(item, dict):
            raise InvalidRequest(f"Item {idx} must be an object with numeric id and order")
        row_id = _as_int(item.get("id"))
        ordinal = _as_int(item.get("order"))
        if row_id is None or ordinal is None:
            raise InvalidRequest(f"Item {idx} must have numeric id and order")
        if not (fits_integer_column(row_id) and fits_integer_column(ordinal)):
            raise InvalidRequest(f"Item {idx} id and order must fit a 32-bit integer")
        if row_id in seen:
            raise InvalidRequest(f"Duplicate id {row_id} in reorder payload")
        seen.add(row_id)
        pairs.append((row_id, ordinal))
    return pairs


def next_sort_order(conn: Connection) -> int:
    """Return the ordinal for a new customer: one past the current maximum."""
    row = conn.execute(sql_text("SELECT COALESCE(MAX(sort_order), -1) + 1 FROM customers")).fetchone()
    return int(row[0]) if row and row[0] is not None else 0


def apply_reorder(pairs: Sequence[OrdinalPair]) -> List[Dict[str, int]]:
    """Persist a batch of ordinal reassignments atomically.

    Each pair is written with its own bound UPDATE on a shared transaction.
    If any id matches no row, ``PartialUpdate`` is raised inside the
    transaction scope so every write of the batch is rolled back.

    Returns ``[{"id", "sort_order"}]`` read back before commit, in request
    order.
    """
    if not pairs:
        raise InvalidRequest("Reorder payload must not be empty")

    with transaction_scope() as conn:
        updated = 0
        missing: List[int] = []
        for row_id, ordinal in pairs:
            result = conn.execute(_UPDATE_ORDINAL, {"sort_order": int(ordinal), "id": int(row_id)})
            if result.rowcount == 1:
                updated += 1
            else:
                missing.append(int(row_id))

        if updated != len(pairs):
            logger.warning(
                "reorder.partial_update requested=%s updated=%s missing=%s",
                len(pairs),
                updated,
                missing,
            )
            raise PartialUpdate(requested=len(pairs), updated=updated, missing_ids=missing)

        rows = conn.execute(_READ_ORDINALS, {"ids": [int(i) for i, _ in pairs]}).fetchall()
        persisted = {int(r[0]): int(r[1]) for r in rows}

    records = [{"id": int(i), "sort_order": persisted[int(i)]} for i, _ in pairs]
    logger.info(
        "reorder.applied count=%s ids=%s",
        len(records),
        [r["id"] for r in records],
    )
    return records


__all__ = [
    "OrdinalPair",
    "apply_reorder",
    "next_sort_order",
    "validate_reorder_batch",
]
