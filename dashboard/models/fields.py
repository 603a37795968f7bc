"""Shared field validators for form payloads.

Mirrors the validation rules of the dashboard's register and customer
forms so the API rejects what the forms would reject.
"""

from __future__ import annotations

import re
from typing import Any

ZIP_RE = re.compile(r"^\d{6}$")


def normalize_email(value: str) -> str:
    return (value or "").strip().lower()


def require_email(value: Any) -> Any:
    """Normalise ahead of ``EmailStr``, which checks the address itself."""
    if value is not None and not isinstance(value, str):
        return value
    email = normalize_email(value)
    if not email:
        raise ValueError("Email is required")
    return email


def check_required(value: str | None, label: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValueError(f"{label} is required")
    return text


def check_zip(value: str | None) -> str:
    text = (value or "").strip()
    if not text:
        raise ValueError("Zip is required")
    if not ZIP_RE.match(text):
        raise ValueError("Invalid ZIP code")
    return text


def blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
