"""CORS configuration helpers.

The dashboard front-end authenticates with an httpOnly cookie, so
credentials must be allowed and origins listed explicitly in production.
"""

from __future__ import annotations

from typing import Iterable
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


# Headers the browser client may read from responses
EXPOSE_HEADERS: list[str] = [
    "X-Request-Id",
]


def apply_cors(app: FastAPI, *, origins: Iterable[str] | None = None) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(origins or ["http://localhost:3000"]),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-Id"],
        expose_headers=EXPOSE_HEADERS,
    )


__all__ = ["apply_cors", "EXPOSE_HEADERS"]
