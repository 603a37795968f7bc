from __future__ import annotations

import logging
from typing import Callable

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from sqlalchemy import text as sql_text
from sqlalchemy.exc import SQLAlchemyError

from dashboard.config import get_config
from dashboard.db.base import get_engine
from dashboard.db.migrations_runner import apply_migrations
from dashboard.errors import DashboardError
from dashboard.http.errors import (
    handle_dashboard_error,
    handle_http_exception,
    handle_request_validation_error,
    handle_unexpected_error,
)
from dashboard.http.request_id import RequestIdMiddleware
from dashboard.logging_setup import configure_logging
from dashboard.middleware.cors import apply_cors
from dashboard.routes import api_router

logger = logging.getLogger(__name__)


def _health_check() -> Callable[[], dict]:
    def check() -> dict:
        try:
            with get_engine().connect() as conn:
                conn.execute(sql_text("SELECT 1"))
            return {"status": "ok", "db": True}
        except SQLAlchemyError as e:
            logger.error("Health DB check failed", exc_info=True)
            return {"status": "degraded", "db": False, "reason": type(e).__name__}

    return check


def create_app() -> FastAPI:
    configure_logging()
    config = get_config()

    app = FastAPI(title="Customer Dashboard API", version="0.1.0")

    app.add_exception_handler(DashboardError, handle_dashboard_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    apply_cors(app)
    app.add_middleware(RequestIdMiddleware)

    # Apply migrations on startup (guarded) to avoid import-time side effects
    @app.on_event("startup")
    def _apply_migrations() -> None:
        if not config.database.auto_apply_migrations:
            logger.info("AUTO_APPLY_MIGRATIONS disabled; skipping migrations at startup")
            return
        engine = get_engine()
        try:
            applied = apply_migrations(engine)
        except Exception:
            logger.error("Failed to apply migrations at startup", exc_info=True)
            raise
        logger.info("startup_migrations_applied files=%s", applied)

    app.include_router(api_router, prefix="/api")

    health_check = _health_check()

    @app.get("/health")
    def health():
        return health_check()

    logger.info("app_created environment=%s", config.environment)
    return app


# Intentionally do not instantiate the app at import time to prevent side effects.
