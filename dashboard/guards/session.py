"""Session guard for dashboard routes.

Reads the JWT from the auth cookie, verifies it and loads the user. Any
failure surfaces as ``AuthenticationRequired`` (401).
"""

from __future__ import annotations

import logging

from fastapi import Request, Response

from dashboard.config import get_config
from dashboard.errors import AuthenticationRequired
from dashboard.logic.repository_users import get_user_by_id
from dashboard.logic.tokens import decode_token
from dashboard.models.auth import SessionUser

logger = logging.getLogger(__name__)


def require_user(request: Request) -> SessionUser:
    auth = get_config().auth
    claims = decode_token(request.cookies.get(auth.cookie_name), auth=auth)
    user = get_user_by_id(int(claims["sub"]))
    if user is None:
        logger.info("auth.session_user_missing sub=%s", claims.get("sub"))
        raise AuthenticationRequired("User not found")
    return SessionUser(**{k: user.get(k) for k in SessionUser.model_fields})


def set_auth_cookie(response: Response, token: str) -> None:
    auth = get_config().auth
    response.set_cookie(
        key=auth.cookie_name,
        value=token,
        max_age=auth.cookie_max_age,
        httponly=True,
        samesite="lax",
        secure=auth.cookie_secure,
        path="/",
    )


def clear_auth_cookie(response: Response) -> None:
    auth = get_config().auth
    response.set_cookie(
        key=auth.cookie_name,
        value="",
        max_age=0,
        httponly=True,
        samesite="lax",
        secure=auth.cookie_secure,
        path="/",
    )


__all__ = ["require_user", "set_auth_cookie", "clear_auth_cookie"]
