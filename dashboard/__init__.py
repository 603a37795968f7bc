"""Customer dashboard service.

This package exposes a FastAPI application factory for the customer
administration dashboard: cookie-based authentication, a paginated and
searchable customers listing, the create/edit form endpoints and
drag-to-reorder persistence. Business logic lives in `dashboard/logic/`,
route handlers in `dashboard/routes/` and the asynchronous browser-side
controllers in `dashboard/client/`.
"""

from __future__ import annotations

from dashboard.main import create_app

__all__ = ["create_app"]
