"""Password hashing helpers.

Hashes are bcrypt over a SHA-256 pre-hash so passwords longer than bcrypt's
72-byte input limit are not silently truncated.
"""

from __future__ import annotations

import base64
import hashlib
import logging

import bcrypt

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10


def _prehash(password: str) -> bytes:
    # base64 keeps the digest free of NUL bytes and under 72 bytes
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str, *, rounds: int = BCRYPT_ROUNDS) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("password_hash_unreadable")
        return False


__all__ = ["hash_password", "verify_password"]
