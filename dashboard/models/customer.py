"""Pydantic models for the customer create/edit form.

Field names follow the form (``firstname``, ``sfirstname`` ...); the
repository maps them onto the ``customers`` columns.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

from dashboard.models.fields import blank_to_none, check_required, check_zip, require_email

_REQUIRED_LABELS = {
    "firstname": "First name",
    "lastname": "Last name",
    "company": "Company name",
    "address": "Address",
    "city": "City",
    "state": "State",
    "country": "Country",
}

_OPTIONAL_FIELDS = (
    "phone",
    "mobile",
    "sfirstname",
    "slastname",
    "scompany",
    "saddress",
    "scity",
    "sstate",
    "szip",
    "scountry",
    "sphone",
    "smobile",
    "sendinvoice",
    "conformance",
    "terms",
    "freight",
    "note",
)

# form field -> customers column
FORM_TO_COLUMN: dict[str, str] = {
    "firstname": "first_name",
    "lastname": "last_name",
    "company": "company",
    "address": "address",
    "city": "city",
    "state": "state",
    "zip": "zip",
    "country": "country",
    "phone": "phone",
    "mobile": "mobile",
    "email": "email",
    "sfirstname": "shipping_firstname",
    "slastname": "shipping_lastname",
    "scompany": "shipping_company",
    "saddress": "shipping_address",
    "scity": "shipping_city",
    "sstate": "shipping_state",
    "szip": "shipping_zip",
    "scountry": "shipping_country",
    "sphone": "shipping_phone",
    "smobile": "shipping_mobile",
    "sendinvoice": "sendinvoice",
    "conformance": "conformance",
    "terms": "terms",
    "freight": "freight",
    "note": "note",
}


class CustomerForm(BaseModel):
    model_config = ConfigDict(validate_default=True)

    email: EmailStr
    firstname: str = ""
    lastname: str = ""
    company: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    zip: str = ""
    password: str | None = None
    phone: str | None = None
    mobile: str | None = None
    sfirstname: str | None = None
    slastname: str | None = None
    scompany: str | None = None
    saddress: str | None = None
    scity: str | None = None
    sstate: str | None = None
    szip: str | None = None
    scountry: str | None = None
    sphone: str | None = None
    smobile: str | None = None
    # Checkbox values arrive as strings or booleans depending on the form
    sendinvoice: str | bool | None = None
    conformance: str | None = None
    terms: str | None = None
    freight: str | None = None
    note: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, v: Any) -> Any:
        return require_email(v)

    @field_validator(*_REQUIRED_LABELS)
    @classmethod
    def _required(cls, v: str, info) -> str:  # type: ignore[no-untyped-def]
        return check_required(v, _REQUIRED_LABELS[info.field_name])

    @field_validator("zip")
    @classmethod
    def _zip(cls, v: str) -> str:
        return check_zip(v)

    @field_validator(*_OPTIONAL_FIELDS, "password")
    @classmethod
    def _optional(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return "true" if v else "false"
        return blank_to_none(v)

    def column_values(self) -> dict[str, Any]:
        """Return column -> value for every form field except the password."""
        data = self.model_dump()
        return {column: data.get(field) for field, column in FORM_TO_COLUMN.items()}


__all__ = ["CustomerForm", "FORM_TO_COLUMN"]
