"""Logging configuration for the dashboard service.

One stdout handler on the root logger; every record carries the id of the
request it was emitted under (``-`` outside a request). Uvicorn loggers stay
visible and SQLAlchemy engine chatter is held at WARNING.
"""
from __future__ import annotations
import logging
import os
from logging.config import dictConfig

from dashboard.http.request_id import current_request_id

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:[%(request_id)s] %(message)s"


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id.get()
        return True


def _dict_config(level: str) -> dict:
    console = {
        "class": "logging.StreamHandler",
        "level": level,
        "formatter": "default",
        "filters": ["request_id"],
        "stream": "ext://sys.stdout",
    }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"request_id": {"()": RequestIdFilter}},
        "formatters": {"default": {"format": LOG_FORMAT}},
        "handlers": {"console": console},
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            "uvicorn": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "uvicorn.error": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": "INFO", "handlers": ["console"], "propagate": False},
            "sqlalchemy.engine": {"level": "WARNING", "propagate": True},
        },
    }


def configure_logging() -> None:
    """Configure application-wide logging once.

    Returns early when the root logger already has handlers (reloaders,
    pytest's capture handler).
    """
    if logging.getLogger().handlers:
        return
    level = (os.environ.get("LOG_LEVEL") or "INFO").strip().upper()
    dictConfig(_dict_config(level))
