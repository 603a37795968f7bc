"""Functional tests for POST /api/dashboard/customers/reorder.

Covers the all-or-nothing batch contract: happy path, partial-update
rollback, payload rejection before any write, concurrent batches and the
session guard.
"""

from __future__ import annotations

import pytest

from support import assert_matches_schema, insert_customers, sort_orders

REORDER = "/api/dashboard/customers/reorder"
LIST = "/api/dashboard/customers"


def test_reorder_persists_ordinals_and_listing_follows(auth_client):
    a, b, c = insert_customers("Ann", "Bob", "Cid")

    resp = auth_client.post(REORDER, json=[{"id": c, "order": 0}, {"id": a, "order": 1}, {"id": b, "order": 2}])

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert_matches_schema("ReorderResult", body)
    assert body["message"] == "Order updated for 3 customers"
    assert body["updatedRecords"] == [
        {"id": c, "sort_order": 0},
        {"id": a, "sort_order": 1},
        {"id": b, "sort_order": 2},
    ]
    listing = auth_client.get(LIST, params={"sortBy": "sort_order", "sortOrder": "asc"}).json()
    assert [u["id"] for u in listing["users"]] == [c, a, b]


def test_reorder_with_unknown_id_rolls_back_every_row(auth_client):
    a, b = insert_customers("Ann", "Bob")
    before = sort_orders()

    resp = auth_client.post(REORDER, json=[{"id": b, "order": 0}, {"id": 999999, "order": 1}, {"id": a, "order": 2}])

    assert resp.status_code == 500
    body = resp.json()
    assert_matches_schema("ErrorEnvelope", body)
    assert body["message"] == "Failed to update order"
    assert body["code"] == "PARTIAL_UPDATE"
    assert "999999" in body["error"]
    assert sort_orders() == before


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {},
        {"id": 1, "newOrder": 2},
        {"reorderedUsers": [{"id": 1, "order": 0}]},
        [{"id": "1", "order": 0}],
        [{"id": 1}],
        [{"id": True, "order": 0}],
        [{"id": 1.5, "order": 0}],
        [5],
    ],
)
def test_invalid_payloads_are_rejected_without_writes(auth_client, payload):
    insert_customers("Ann", "Bob")
    before = sort_orders()

    resp = auth_client.post(REORDER, json=payload)

    assert resp.status_code == 400, resp.text
    assert_matches_schema("ErrorEnvelope", resp.json())
    assert sort_orders() == before


@pytest.mark.parametrize("huge", [2**64, 1e20, 2**31])
def test_ids_and_ordinals_beyond_integer_range_are_rejected_without_writes(auth_client, huge):
    a, b = insert_customers("Ann", "Bob")
    before = sort_orders()

    for payload in (
        [{"id": a, "order": 0}, {"id": huge, "order": 1}],
        [{"id": a, "order": 0}, {"id": b, "order": huge}],
    ):
        resp = auth_client.post(REORDER, json=payload)

        assert resp.status_code == 400, resp.text
        assert resp.json()["message"] == "Item 1 id and order must fit a 32-bit integer"
    assert sort_orders() == before


def test_body_that_is_not_json_is_rejected(auth_client):
    resp = auth_client.post(REORDER, content=b"not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Request body must be valid JSON"


def test_duplicate_ids_are_rejected(auth_client):
    (a,) = insert_customers("Ann")
    before = sort_orders()

    resp = auth_client.post(REORDER, json=[{"id": a, "order": 0}, {"id": a, "order": 1}])

    assert resp.status_code == 400
    assert sort_orders() == before


def test_integral_float_ordinals_are_accepted(auth_client):
    a, b = insert_customers("Ann", "Bob")

    resp = auth_client.post(REORDER, json=[{"id": b, "order": 0.0}, {"id": a, "order": 1.0}])

    assert resp.status_code == 200
    assert sort_orders() == {b: 0, a: 1}


def test_two_batches_last_writer_wins(auth_client):
    a, b, c = insert_customers("Ann", "Bob", "Cid")

    first = auth_client.post(REORDER, json=[{"id": b, "order": 0}, {"id": a, "order": 1}, {"id": c, "order": 2}])
    second = auth_client.post(REORDER, json=[{"id": c, "order": 0}, {"id": b, "order": 1}, {"id": a, "order": 2}])

    assert first.status_code == second.status_code == 200
    assert sort_orders() == {c: 0, b: 1, a: 2}


def test_subset_batch_leaves_other_rows_untouched(auth_client):
    a, b, c, d = insert_customers("Ann", "Bob", "Cid", "Dee")
    before = sort_orders()

    resp = auth_client.post(REORDER, json=[{"id": c, "order": 1}, {"id": b, "order": 2}])

    assert resp.status_code == 200
    after = sort_orders()
    assert after[c] == 1 and after[b] == 2
    assert after[a] == before[a] and after[d] == before[d]


def test_reorder_requires_session(client):
    (a,) = insert_customers("Ann")
    before = sort_orders()

    resp = client.post(REORDER, json=[{"id": a, "order": 5}])

    assert resp.status_code == 401
    assert resp.json() == {"success": False, "message": "Not authenticated", "code": "AUTHENTICATION_REQUIRED"}
    assert sort_orders() == before
