"""APIRouter registration for the dashboard service."""

from __future__ import annotations

from fastapi import APIRouter

from dashboard.routes.auth import router as auth_router
from dashboard.routes.customers import router as customers_router
from dashboard.routes.reorder import router as reorder_router

api_router = APIRouter()
api_router.include_router(auth_router, tags=["Auth"])
api_router.include_router(reorder_router, tags=["Customers", "Reorder"])
api_router.include_router(customers_router, tags=["Customers"])

__all__ = ["api_router"]
