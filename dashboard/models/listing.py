"""Response models for the customers listing and reorder endpoints."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel


class CustomerListPage(BaseModel):
    users: List[dict[str, Any]]
    totalCount: int
    page: int
    limit: int
    hasMore: bool


class OrdinalRecord(BaseModel):
    id: int
    sort_order: int


class ReorderResult(BaseModel):
    success: bool = True
    message: str
    updatedRecords: List[OrdinalRecord]


__all__ = ["CustomerListPage", "OrdinalRecord", "ReorderResult"]
