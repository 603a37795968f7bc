"""Customers listing and create/edit form endpoints."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from dashboard.config import get_config
from dashboard.errors import NotFound
from dashboard.guards.session import require_user
from dashboard.logic.listing import parse_list_query
from dashboard.logic.passwords import hash_password
from dashboard.logic.repository_customers import (
    get_customer,
    insert_customer,
    list_customers,
    update_customer,
)
from dashboard.models.customer import CustomerForm
from dashboard.models.listing import CustomerListPage

router = APIRouter(prefix="/dashboard/customers", dependencies=[Depends(require_user)])
logger = logging.getLogger(__name__)


@router.get(
    "",
    summary="Paginated, searchable, sortable customer listing",
    operation_id="listCustomers",
    response_model=CustomerListPage,
)
def get_customers(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    sortBy: Optional[str] = Query(None),
    sortOrder: Optional[str] = Query(None),
):
    listing = get_config().listing
    query = parse_list_query(
        page,
        limit,
        search,
        sortBy,
        sortOrder,
        default_limit=listing.default_limit,
        max_limit=listing.max_limit,
    )
    rows, total = list_customers(query)
    logger.info(
        "customers.list",
        extra={"page": query.page, "limit": query.limit, "search": bool(query.search), "total": total},
    )
    return {
        "users": rows,
        "totalCount": total,
        "page": query.page,
        "limit": query.limit,
        "hasMore": query.page * query.limit < total,
    }


@router.post(
    "",
    summary="Create a customer",
    operation_id="createCustomer",
    status_code=status.HTTP_201_CREATED,
)
def create_customer(form: CustomerForm):
    password_hash = hash_password(form.password) if form.password else None
    customer_id = insert_customer(form.column_values(), password_hash=password_hash)
    return {"success": True, "message": "Customer added", "customerId": customer_id}


@router.get(
    "/{customer_id}",
    summary="Get one customer for the edit form",
    operation_id="getCustomer",
)
def read_customer(customer_id: int):
    row = get_customer(customer_id)
    if row is None:
        raise NotFound(f"Customer {customer_id} not found")
    return row


@router.put(
    "/{customer_id}",
    summary="Submit the edit form for a customer",
    operation_id="updateCustomer",
)
def edit_customer(customer_id: int, form: CustomerForm):
    password_hash = hash_password(form.password) if form.password else None
    if not update_customer(customer_id, form.column_values(), password_hash=password_hash):
        raise NotFound(f"Customer {customer_id} not found")
    return {"success": True, "message": "Customer updated", "customerId": customer_id}
