"""
forms/schemas.py -- Per-mode validation schemas.

Pydantic collects every failing field in one ValidationError, so a single
validate() call reports all violations at once. Validators raise
PydanticCustomError rather than ValueError so the message reaches the user
verbatim, without pydantic's "Value error, " prefix.

Email grammar is EmailStr (email-validator). On top of it the top-level
domain must be at least two letters, so dotless-looking hosts such as
"a@b.c" are refused the same way the browser form refuses them.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from pydantic import BaseModel, EmailStr, ValidationError, ValidatorFunctionWrapHandler, field_validator
from pydantic_core import PydanticCustomError

from core.models import MIN_PASSWORD_LENGTH, FormFields, Mode


def _invalid_email() -> PydanticCustomError:
    return PydanticCustomError("invalid_email", "Invalid email address")


class LoginSchema(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="wrap")
    @classmethod
    def check_email(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> str:
        try:
            email = handler(v)
        except ValidationError:
            raise _invalid_email() from None
        tld = email.rpartition("@")[2].rpartition(".")[2]
        if len(tld) < 2 or not tld.isalpha():
            raise _invalid_email()
        return email

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                "password_too_short",
                "Password must be at least {min} characters long",
                {"min": MIN_PASSWORD_LENGTH},
            )
        return v


class AccountSchema(LoginSchema):
    """Signup and register both collect a display name."""

    name: str

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("name_required", "Name is required")
        return v


@lru_cache
def get_schema(mode: Mode) -> type[LoginSchema]:
    """Pure function of mode; cached so each mode resolves its schema once."""
    if mode is Mode.login:
        return LoginSchema
    return AccountSchema


def validate(fields: FormFields, mode: Mode) -> tuple[Optional[FormFields], dict[str, str]]:
    """Validate raw form input for mode.

    Returns (clean_fields, {}) when valid and (None, {field: message, ...})
    otherwise. Missing values are treated as empty strings, matching what an
    untouched input submits. Never raises for invalid input.
    """
    schema = get_schema(mode)
    data = {"email": fields.email or "", "password": fields.password or ""}
    if mode.requires_name:
        data["name"] = fields.name or ""

    try:
        parsed = schema.model_validate(data)
    except ValidationError as exc:
        errors: dict[str, str] = {}
        for err in exc.errors():
            field_name = str(err["loc"][0]) if err["loc"] else "__all__"
            errors.setdefault(field_name, err["msg"])
        return None, errors

    return FormFields(
        email=parsed.email,
        password=parsed.password,
        name=getattr(parsed, "name", None),
    ), {}
