"""Pure client helpers: row moves, batches, pagination strip, view params."""

from __future__ import annotations

import pytest

from dashboard.client import NoticeBoard, RowListState, build_reorder_batch, move_row, pagination_items
from dashboard.client.listing import ViewQuery
from dashboard.client.pagination import LEFT_ELLIPSIS, RIGHT_ELLIPSIS, total_pages


def _ids(rows) -> list:
    return [r["id"] for r in rows]


ROWS = tuple({"id": i} for i in (10, 20, 30, 40))


@pytest.mark.parametrize(
    "source, target, expected",
    [
        (10, 30, [20, 30, 10, 40]),
        (40, 20, [10, 40, 20, 30]),
        (20, 30, [10, 30, 20, 40]),
        (30, 10, [30, 10, 20, 40]),
    ],
)
def test_move_row_is_a_list_move(source, target, expected):
    assert _ids(move_row(ROWS, source, target)) == expected


def test_move_row_rejects_bad_drops():
    with pytest.raises(ValueError):
        move_row(ROWS, 10, 10)
    with pytest.raises(ValueError):
        move_row(ROWS, 10, 99)


def test_move_row_leaves_input_untouched():
    move_row(ROWS, 10, 40)
    assert _ids(ROWS) == [10, 20, 30, 40]


def test_build_reorder_batch_uses_positions():
    assert build_reorder_batch(move_row(ROWS, 40, 10)) == [
        {"id": 40, "order": 0},
        {"id": 10, "order": 1},
        {"id": 20, "order": 2},
        {"id": 30, "order": 3},
    ]


def test_snapshot_survives_replace():
    state = RowListState(ROWS)
    snap = state.snapshot()
    state.replace(move_row(state.rows, 10, 40))
    assert state.ids == [20, 30, 40, 10]
    assert state.total_count == 4
    state.revert_to(snap)
    assert state.ids == [10, 20, 30, 40]
    assert state.index_of(30) == 2


@pytest.mark.parametrize(
    "page_index, total, size, expected",
    [
        (0, 0, 5, []),
        (0, 12, 5, [1, 2, 3]),
        (1, 100, 10, [1, 2, 3, 4, 5]),
        (4, 100, 10, [1, LEFT_ELLIPSIS, 4, 5, 6, RIGHT_ELLIPSIS, 10]),
        (8, 100, 10, [6, 7, 8, 9, 10]),
        (3, 20, 5, [1, 2, 3, 4]),
    ],
)
def test_pagination_items(page_index, total, size, expected):
    assert pagination_items(page_index, total, size) == expected


def test_total_pages():
    assert total_pages(11, 5) == 3
    assert total_pages(10, 0) == 0


def test_view_query_params():
    assert ViewQuery().to_params() == {
        "page": "1",
        "limit": "5",
        "search": "",
        "sortBy": "sort_order",
        "sortOrder": "asc",
    }
    params = ViewQuery(page_index=2, page_size=20, search="ann", sorting=(("email", True), ("id", False))).to_params()
    assert params["page"] == "3"
    assert params["sortBy"] == "email,id"
    assert params["sortOrder"] == "desc,asc"


def test_notice_board_keeps_most_recent():
    board = NoticeBoard(limit=2)
    board.success("one")
    board.error("two")
    board.error("three")
    assert [n.message for n in board.items] == ["two", "three"]
    board.clear()
    assert board.items == []


@pytest.mark.parametrize("limit", [0, -1])
def test_notice_board_requires_positive_limit(limit):
    with pytest.raises(ValueError):
        NoticeBoard(limit=limit)
