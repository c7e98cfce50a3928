"""
api/routes/v1/forms.py -- Form submission and social sign-in endpoints.

Routes:
  POST /api/v1/forms/{mode}             -- validate + submit one form (signup, register, login)
  POST /api/v1/auth/social/{provider}   -- start a social sign-in (google, github)
  GET  /api/v1/auth/providers           -- list configured social providers (public)

Each request builds a fresh FormWorkflow: one HTTP request is one form
render cycle, so no form state outlives the response.

Status mapping:
  422 -- field validation failed; error.fields holds every message
  400 -- submission failed; error.message is the normalized message
  200 -- success; redirect_to is where the browser should go next

Security:
  POST /forms/{mode} is rate-limited per IP (LOGIN_RATE_LIMIT).
  Cache-Control: no-store on every form response -- bodies may echo credentials.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from api.limiter import limiter
from api.models import FormResponse, FormSubmission, OAuthProviderInfo, SocialProviderEnum, SocialSignInResponse
from auth.oauth import get_enabled_providers
from core.config import get_settings
from core.models import FormFields, FormState, Mode
from forms.collaborators import RecordingNavigator
from forms.workflow import FormWorkflow

router = APIRouter()


def _workflow(request: Request, mode: Mode, navigator: RecordingNavigator) -> FormWorkflow:
    return FormWorkflow.from_settings(
        mode,
        identity=request.app.state.identity,
        http=request.app.state.http,
        navigator=navigator,
    )


@limiter.limit(get_settings().login_rate_limit)  # must be ABOVE @router to preserve FastAPI introspection
@router.post("/forms/{mode}", response_model=FormResponse)
async def submit_form(request: Request, mode: Mode, body: FormSubmission) -> JSONResponse:
    """Run one submission of the given form.

    Validation failures and submission failures never raise past the
    workflow; they come back as workflow state and are mapped to 422/400 here.
    """
    navigator = RecordingNavigator()
    workflow = _workflow(request, mode, navigator)
    state = await workflow.submit(FormFields(email=body.email, password=body.password, name=body.name))

    if workflow.errors:
        raise HTTPException(
            status_code=422,
            detail={"code": "validation_error", "message": "Form validation failed.", "fields": workflow.errors},
        )
    if state is FormState.failed:
        raise HTTPException(
            status_code=400,
            detail={"code": "submission_failed", "message": workflow.error},
        )

    payload = workflow.result.payload if workflow.result else None
    redirect_to = navigator.location
    if redirect_to is None and mode is Mode.login and payload:
        redirect_to = payload.get("url")

    resp = JSONResponse(
        content=FormResponse(
            mode=mode.value,
            state=state.value,
            payload=payload if mode is Mode.register else None,
            redirect_to=redirect_to,
        ).model_dump(),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.post("/auth/social/{provider}", response_model=SocialSignInResponse)
async def social_sign_in(request: Request, provider: SocialProviderEnum) -> SocialSignInResponse:
    """Start a social sign-in. Provider failures are logged, not reported.

    A failed or unconfigured provider yields redirect_to=None with a 200, the
    same outcome the login form shows (nothing happens).
    """
    workflow = _workflow(request, Mode.login, RecordingNavigator())
    result = await workflow.sign_in_with(provider.value)
    return SocialSignInResponse(provider=provider.value, redirect_to=result.url if result else None)


@router.get("/auth/providers", response_model=list[OAuthProviderInfo])
async def list_providers() -> list[OAuthProviderInfo]:
    """Return the configured social providers; empty when none are set up."""
    return [OAuthProviderInfo(**p) for p in get_enabled_providers()]
