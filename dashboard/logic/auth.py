"""Registration and login flows."""

from __future__ import annotations

import logging
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError

from dashboard.db.base import transaction_scope
from dashboard.errors import EmailAlreadyRegistered, InvalidCredentials
from dashboard.logic.passwords import hash_password, verify_password
from dashboard.logic.repository_users import email_exists, get_user_by_email, insert_user
from dashboard.models.auth import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


def register_user(payload: RegisterRequest) -> Dict[str, Any]:
    """Create a user and return ``{"id", "email"}``.

    The existence check and insert share one transaction; a concurrent
    registration of the same email still fails on the unique constraint
    and is reported as ``EmailAlreadyRegistered``.
    """
    values = {
        "email": payload.email,
        "password_hash": hash_password(payload.password),
        "first_name": payload.firstname,
        "last_name": payload.lastname,
        "company": payload.company,
        "address": payload.address,
        "city": payload.city,
        "state": payload.state,
        "country": payload.country,
        "zip": payload.zip,
        "phone": payload.phone,
        "about": payload.about,
    }
    try:
        with transaction_scope() as conn:
            if email_exists(conn, payload.email):
                raise EmailAlreadyRegistered()
            user_id = insert_user(conn, values)
    except IntegrityError as exc:
        logger.info("auth.register_conflict email=%s", payload.email)
        raise EmailAlreadyRegistered() from exc
    logger.info("auth.registered", extra={"user_id": user_id})
    return {"id": user_id, "email": payload.email}


def authenticate(payload: LoginRequest) -> Dict[str, Any]:
    user = get_user_by_email(payload.email)
    if user is None or not verify_password(payload.password, user.get("password_hash")):
        logger.info("auth.login_failed", extra={"email": payload.email})
        raise InvalidCredentials()
    user.pop("password_hash", None)
    logger.info("auth.login", extra={"user_id": user["id"]})
    return user


__all__ = ["register_user", "authenticate"]
