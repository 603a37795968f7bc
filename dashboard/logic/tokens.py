"""Session token helpers (HS256 JWT carried in an httpOnly cookie)."""

from __future__ import annotations

import logging
import time
from typing import Any

from jose import JWTError, jwt

from dashboard.config import AuthConfig, get_config
from dashboard.errors import AuthenticationRequired

logger = logging.getLogger(__name__)


def create_token(user_id: int, email: str, *, auth: AuthConfig | None = None, now: int | None = None) -> str:
    cfg = auth or get_config().auth
    issued = int(now if now is not None else time.time())
    claims = {
        "sub": str(user_id),
        "email": email,
        "iat": issued,
        "exp": issued + cfg.jwt_ttl_seconds,
    }
    return jwt.encode(claims, cfg.jwt_secret, algorithm=cfg.jwt_algorithm)


def decode_token(token: str | None, *, auth: AuthConfig | None = None) -> dict[str, Any]:
    """Return verified claims or raise ``AuthenticationRequired``.

    Expired, tampered and malformed tokens are all reported the same way to
    the caller; the reason is only logged.
    """
    if not token:
        raise AuthenticationRequired()
    cfg = auth or get_config().auth
    try:
        claims = jwt.decode(token, cfg.jwt_secret, algorithms=[cfg.jwt_algorithm])
    except JWTError as exc:
        logger.info("auth.token_rejected reason=%s", exc)
        raise AuthenticationRequired("Invalid or expired session") from exc
    sub = claims.get("sub")
    if not sub or not str(sub).isdigit():
        raise AuthenticationRequired("Invalid or expired session")
    return claims


__all__ = ["create_token", "decode_token"]
