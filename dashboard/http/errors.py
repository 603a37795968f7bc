"""JSON error envelope and global exception handlers.

Every non-2xx response produced by the API has the shape
``{"success": false, "message": str, ...}``. Optional keys: ``code`` for
taxonomy errors, ``errors`` for field validation failures and ``error`` for
internal detail, which is only emitted outside production.
"""

from __future__ import annotations

from typing import Any
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from dashboard.config import get_config
from dashboard.errors import DashboardError

logger = logging.getLogger(__name__)


def error_body(message: str, *, code: str | None = None, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"success": False, "message": message}
    if code:
        body["code"] = code
    body.update({k: v for k, v in extra.items() if v is not None})
    return body


def _expose_detail() -> bool:
    try:
        return not get_config().is_production
    except Exception:
        # An invalid config must not turn an error response into a crash
        logger.error("config_unavailable_in_error_handler", exc_info=True)
        return False


async def handle_dashboard_error(request: Request, exc: DashboardError) -> JSONResponse:
    extra: dict[str, Any] = {}
    if exc.status_code >= 500 and exc.detail is not None and _expose_detail():
        extra["error"] = str(exc.detail)
    elif exc.status_code < 500 and isinstance(exc.detail, list):
        extra["errors"] = exc.detail
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "dashboard_error",
        extra={"path": request.url.path, "status": exc.status_code, "code": exc.code},
    )
    return JSONResponse(error_body(exc.message, code=exc.code, **extra), status_code=exc.status_code)


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    status_code = int(getattr(exc, "status_code", 500) or 500)
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        error_body(message),
        status_code=status_code,
        headers=getattr(exc, "headers", None),
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"),
            "message": str(err.get("msg", "")).removeprefix("Value error, "),
        }
        for err in exc.errors()
    ]
    first = errors[0]["message"] if errors else "Request validation failed"
    return JSONResponse(
        error_body(first, code="VALIDATION_FAILED", errors=errors),
        status_code=400,
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unexpected_error path=%s", request.url.path, exc_info=True)
    detail = f"{type(exc).__name__}: {exc}" if _expose_detail() else None
    return JSONResponse(
        error_body("Something went wrong. Please try again.", code="INTERNAL_ERROR", error=detail),
        status_code=500,
    )


__all__ = [
    "error_body",
    "handle_dashboard_error",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_unexpected_error",
]
