"""
core/models.py -- Domain types shared by the form workflow, the API and the CLI.

Pattern: Data class / Enum (pure data, no I/O). Enums are str-valued so they
round-trip through JSON and path parameters unchanged.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------

MIN_PASSWORD_LENGTH = 6
GENERIC_ERROR_MESSAGE = "Something went wrong"


class Mode(str, Enum):
    signup = "signup"
    register = "register"
    login = "login"

    @property
    def requires_name(self) -> bool:
        return self is not Mode.login


class ActionToken(str, Enum):
    """Which user action is in flight. None on the workflow means idle."""

    submit = "submit"
    google = "google"
    github = "github"

    @property
    def is_social(self) -> bool:
        return self is not ActionToken.submit


SOCIAL_PROVIDERS = tuple(t for t in ActionToken if t.is_social)


class FormState(str, Enum):
    idle = "idle"
    validating = "validating"
    submitting = "submitting"
    success = "success"
    failed = "failed"


@dataclass
class FormFields:
    email: str = ""
    password: str = ""
    name: Optional[str] = None  # ignored in login mode

    def as_payload(self, mode: Mode) -> dict[str, str]:
        payload = {"email": self.email, "password": self.password}
        if mode.requires_name:
            payload = {"name": self.name or "", **payload}
        return payload


@dataclass
class SubmissionResult:
    ok: bool
    payload: Optional[dict[str, Any]] = None
    message: Optional[str] = None


@dataclass
class SignInResult:
    """What the identity provider returns. error is set on bad credentials."""

    error: Optional[str] = None
    url: Optional[str] = None


@dataclass
class RestResponse:
    status: int
    data: Any = None
    headers: dict[str, str] = field(default_factory=dict)
