"""Asynchronous client-side controllers for the dashboard views.

The listing view and the drag-to-reorder controller share one
``RowListState``. Network access goes through ``DashboardClient``.
"""

from __future__ import annotations

from dashboard.client.api import DashboardClient
from dashboard.client.errors import ClientError, RequestFailed, StaleResponse, TransportFailure
from dashboard.client.listing import CustomerListController
from dashboard.client.notices import Notice, NoticeBoard
from dashboard.client.pagination import pagination_items
from dashboard.client.reorder import ReorderController, build_reorder_batch, move_row
from dashboard.client.state import RowListState

__all__ = [
    "ClientError",
    "CustomerListController",
    "DashboardClient",
    "Notice",
    "NoticeBoard",
    "ReorderController",
    "RequestFailed",
    "RowListState",
    "StaleResponse",
    "TransportFailure",
    "build_reorder_batch",
    "move_row",
    "pagination_items",
]
