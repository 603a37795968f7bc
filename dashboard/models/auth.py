"""Pydantic models for register/login payloads and the session user."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

from dashboard.models.fields import check_required, check_zip, normalize_email, require_email

_REQUIRED_LABELS = {
    "firstname": "First name",
    "lastname": "Last name",
    "company": "Company name",
    "address": "Address",
    "city": "City",
    "state": "State",
    "country": "Country",
    "phone": "Phone number",
    "about": "About",
}


class RegisterRequest(BaseModel):
    model_config = ConfigDict(validate_default=True)

    email: EmailStr
    password: str
    firstname: str = ""
    lastname: str = ""
    company: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    zip: str = ""
    phone: str = ""
    about: str = ""

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v: Any) -> Any:
        return require_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    @field_validator(*_REQUIRED_LABELS)
    @classmethod
    def _required(cls, v: str, info) -> str:  # type: ignore[no-untyped-def]
        return check_required(v, _REQUIRED_LABELS[info.field_name])

    @field_validator("zip")
    @classmethod
    def _zip(cls, v: str) -> str:
        return check_zip(v)


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return normalize_email(v)


class SessionUser(BaseModel):
    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None


__all__ = ["RegisterRequest", "LoginRequest", "SessionUser"]
