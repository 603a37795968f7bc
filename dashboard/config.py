"""Configuration utilities for the customer dashboard.

This module loads application configuration with the following rules:
- Primary source: `dashboard_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_DASHBOARD_CONFIG = Path("dashboard_config.json")
logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class DatabaseConfig(BaseModel):
    dsn: str
    auto_apply_migrations: bool = Field(default=False)

    @field_validator("dsn")
    @classmethod
    def dsn_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("database.dsn must be a non-empty string")
        return v


class AuthConfig(BaseModel):
    jwt_secret: str
    jwt_algorithm: str = Field(default="HS256")
    jwt_ttl_seconds: int = Field(default=60 * 60 * 24 * 7, gt=0)
    cookie_name: str = Field(default="token")
    cookie_max_age: int = Field(default=60 * 60 * 24, gt=0)
    cookie_secure: bool = Field(default=False)

    @field_validator("jwt_secret")
    @classmethod
    def secret_must_be_non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("auth.jwt_secret must be a non-empty string")
        return v


class ListingConfig(BaseModel):
    default_limit: int = Field(default=5, gt=0)
    max_limit: int = Field(default=50, gt=0)


class AppConfig(BaseModel):
    environment: str = Field(default="development")
    database: DatabaseConfig
    auth: AuthConfig
    listing: ListingConfig

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) dashboard_config.json at project root
    4) Safe defaults for development
    """

    base = _read_json_file(ROOT_DASHBOARD_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    environment = _env("APP_ENV") or _read_config_file("app.env") or _base("environment", "development")

    # Database
    dsn = (
        _env("TEST_DATABASE_URL")
        or _env("DATABASE_URL")
        or _read_config_file("database.url")
        or _base("database.dsn")
        or "sqlite+pysqlite:///:memory:"
    )
    auto_migrate_text = _env("AUTO_APPLY_MIGRATIONS") or _base("database.auto_apply_migrations", "false")

    # Auth
    jwt_secret = _env("JWT_SECRET") or _read_config_file("auth.jwt_secret") or _base("auth.jwt_secret", "dev-secret")
    jwt_ttl_text = _env("JWT_TTL_SECONDS") or _base("auth.jwt_ttl_seconds", str(60 * 60 * 24 * 7))
    cookie_name = _env("AUTH_COOKIE_NAME") or _base("auth.cookie_name", "token")
    cookie_max_age_text = _env("AUTH_COOKIE_MAX_AGE") or _base("auth.cookie_max_age", str(60 * 60 * 24))
    cookie_secure_text = _env("AUTH_COOKIE_SECURE") or _base("auth.cookie_secure", "false")

    # Listing
    default_limit_text = _env("LIST_DEFAULT_LIMIT") or _base("listing.default_limit", "5")
    max_limit_text = _env("LIST_MAX_LIMIT") or _base("listing.max_limit", "50")

    try:
        cfg = AppConfig(
            environment=str(environment).strip(),
            database=DatabaseConfig(
                dsn=dsn,
                auto_apply_migrations=str(auto_migrate_text).strip().lower() in _TRUE_VALUES,
            ),
            auth=AuthConfig(
                jwt_secret=str(jwt_secret),
                jwt_ttl_seconds=int(str(jwt_ttl_text).strip()),
                cookie_name=str(cookie_name).strip(),
                cookie_max_age=int(str(cookie_max_age_text).strip()),
                cookie_secure=str(cookie_secure_text).strip().lower() in _TRUE_VALUES,
            ),
            listing=ListingConfig(
                default_limit=int(str(default_limit_text).strip()),
                max_limit=int(str(max_limit_text).strip()),
            ),
        )
        return cfg
    except (PydanticValidationError, ValueError) as e:
        logger.error("Invalid application configuration: %s", e)
        raise


_CONFIG: AppConfig | None = None


def get_config() -> AppConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config()
    return _CONFIG


def reset_config() -> None:
    global _CONFIG
    _CONFIG = None


__all__ = [
    "AppConfig",
    "AuthConfig",
    "DatabaseConfig",
    "ListingConfig",
    "get_config",
    "load_config",
    "reset_config",
]
