"""
API request and response models for FormFlow REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in core/models.py, which
own the internal domain representation. Route handlers map between the two.

FormSubmission is deliberately permissive (plain strings, everything
optional): field rules live in forms/schemas.py so the API reports the same
per-field messages the form shows, instead of pydantic's transport errors.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class SocialProviderEnum(str, Enum):
    google = "google"
    github = "github"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class FormSubmission(BaseModel):
    """Request body for POST /api/v1/forms/{mode}. name is ignored in login mode."""

    name: Optional[str] = None
    email: str = ""
    password: str = ""


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class FormResponse(BaseModel):
    """Successful submission. payload is the registered record in register mode."""

    model_config = ConfigDict(frozen=True)

    mode: str
    state: str
    payload: Optional[dict[str, Any]] = None
    redirect_to: Optional[str] = None


class SocialSignInResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    provider: str
    redirect_to: Optional[str] = None


class OAuthProviderInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    label: str


class ErrorDetail(BaseModel):
    """Machine-readable error payload. fields carries per-field validation messages."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None
    fields: Optional[dict[str, str]] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
