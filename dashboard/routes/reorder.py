"""Customer reorder endpoint.

Accepts a JSON array of ``{"id": int, "order": int}`` and applies it as one
all-or-nothing batch. This is the only accepted shape; single-row
``{id, newOrder}`` bodies and wrapped ``{reorderedUsers: [...]}`` objects are
rejected as invalid requests.
"""

from __future__ import annotations

import json
import logging

import anyio
from fastapi import APIRouter, Depends, Request

from dashboard.errors import InvalidRequest
from dashboard.guards.session import require_user
from dashboard.logic.order_sequences import apply_reorder, validate_reorder_batch
from dashboard.models.listing import ReorderResult

router = APIRouter(prefix="/dashboard/customers", dependencies=[Depends(require_user)])
logger = logging.getLogger(__name__)


@router.post(
    "/reorder",
    summary="Persist a drag-and-drop reorder of customers",
    operation_id="reorderCustomers",
    response_model=ReorderResult,
)
async def reorder_customers(request: Request):
    raw = await request.body()
    try:
        payload = json.loads(raw.decode("utf-8")) if raw else None
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidRequest("Request body must be valid JSON") from exc

    pairs = validate_reorder_batch(payload)
    # Blocking DB work runs off the event loop
    records = await anyio.to_thread.run_sync(apply_reorder, pairs)
    return {
        "success": True,
        "message": f"Order updated for {len(records)} customers",
        "updatedRecords": records,
    }
