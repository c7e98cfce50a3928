"""
forms/workflow.py -- FormWorkflow: validate -> submit -> resolve for one form.

One instance per rendered form. It owns every piece of form state (fields,
per-field errors, the displayed error message, the in-flight action and the
retained register payload) and shares none of it with other instances.

Concurrency: everything runs on one asyncio loop. self.action is the mutual
exclusion marker. It is set before the first await and cleared in a finally
block, so a second submit() or sign_in_with() issued while the first is still
awaiting its collaborator is ignored and exactly one call goes out.

Error asymmetry: credentials failures become self.error; social-provider
failures are logged and dropped. See DESIGN.md (Open Questions).
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Optional, Union

from core.config import Settings, get_settings
from core.models import SOCIAL_PROVIDERS, ActionToken, FormFields, FormState, Mode, SignInResult, SubmissionResult
from forms.collaborators import HttpClient, IdentityProvider, Navigator
from forms.errors import normalize_error
from forms.schemas import validate

logger = logging.getLogger("formflow.forms.workflow")

Strategy = Callable[[FormFields], Awaitable[SubmissionResult]]


class FormWorkflow:
    def __init__(
        self,
        mode: Union[Mode, str],
        *,
        identity: IdentityProvider,
        http: HttpClient,
        navigator: Navigator,
        signup_url: str,
        register_url: str,
        callback_url: str,
        signup_redirect_path: str = "/",
        on_success: Optional[Callable[[], None]] = None,
    ) -> None:
        self.mode = Mode(mode)
        self.identity = identity
        self.http = http
        self.navigator = navigator
        self.signup_url = signup_url
        self.register_url = register_url
        self.callback_url = callback_url
        self.signup_redirect_path = signup_redirect_path
        self.on_success = on_success

        self.state = FormState.idle
        self.action: Optional[ActionToken] = None
        self.fields = FormFields()
        self.errors: dict[str, str] = {}
        self.error: Optional[str] = None
        self.result: Optional[SubmissionResult] = None
        self.registered: Optional[dict[str, Any]] = None

        self._strategies: dict[Mode, Strategy] = {
            Mode.signup: self._submit_signup,
            Mode.register: self._submit_register,
            Mode.login: self._submit_login,
        }
        missing = set(Mode) - set(self._strategies)
        if missing:
            raise RuntimeError(f"No submission strategy for: {sorted(m.value for m in missing)}")

    @classmethod
    def from_settings(
        cls,
        mode: Union[Mode, str],
        *,
        identity: IdentityProvider,
        http: HttpClient,
        navigator: Navigator,
        on_success: Optional[Callable[[], None]] = None,
        settings: Optional[Settings] = None,
    ) -> "FormWorkflow":
        cfg = settings or get_settings()
        return cls(
            mode,
            identity=identity,
            http=http,
            navigator=navigator,
            signup_url=cfg.signup_url,
            register_url=cfg.register_url,
            callback_url=cfg.callback_url,
            signup_redirect_path=cfg.signup_redirect_path,
            on_success=on_success,
        )

    # ------------------------------------------------------------------
    # Derived view state
    # ------------------------------------------------------------------

    @property
    def busy(self) -> bool:
        return self.action is not None

    @property
    def locked(self) -> bool:
        """True when every control (inputs, submit, social buttons) is disabled."""
        return self.busy or self.registered is not None

    @property
    def show_name_field(self) -> bool:
        return self.mode.requires_name

    @property
    def social_providers(self) -> tuple[ActionToken, ...]:
        if self.mode is not Mode.login:
            return ()
        return SOCIAL_PROVIDERS

    def is_pending(self, action: ActionToken) -> bool:
        return self.action is action

    def snapshot(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "state": self.state.value,
            "action": self.action.value if self.action else None,
            "errors": dict(self.errors),
            "error": self.error,
            "payload": self.result.payload if self.result else None,
            "locked": self.locked,
        }

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def submit(self, fields: FormFields) -> FormState:
        """Validate fields and, when valid, run this mode's submission strategy.

        Ignored (returns the current state unchanged) while the form is locked.
        """
        if self.locked:
            logger.debug("submit ignored: form locked (action=%s)", self.action)
            return self.state

        self.fields = fields
        self.error = None
        self.result = None
        self.state = FormState.validating
        clean, self.errors = validate(fields, self.mode)
        if clean is None:
            self.state = FormState.idle
            return self.state

        self.action = ActionToken.submit
        self.state = FormState.submitting
        try:
            result = await self._strategies[self.mode](clean)
            if result.ok and self.on_success is not None:
                self.on_success()
        except Exception as exc:
            logger.info("%s submission failed: %s", self.mode.value, exc)
            result = SubmissionResult(ok=False, message=normalize_error(exc))
        finally:
            self.action = None

        self.result = result
        if result.ok:
            self.state = FormState.success
        else:
            self.error = result.message
            self.state = FormState.failed
        return self.state

    async def sign_in_with(self, provider: Union[ActionToken, str]) -> Optional[SignInResult]:
        """Delegate sign-in to a social provider. Login form only.

        Raised errors are logged, never shown: self.error is left untouched.
        Returns the provider's result, or None when ignored or failed.
        """
        token = ActionToken(provider)
        if self.mode is not Mode.login:
            raise ValueError("Social sign-in is only available on the login form")
        if not token.is_social:
            raise ValueError(f"{token.value!r} is not a social provider")
        if self.locked:
            logger.debug("%s sign-in ignored: form locked (action=%s)", token.value, self.action)
            return None

        previous = self.state
        self.action = token
        self.state = FormState.submitting
        try:
            return await self.identity.sign_in(token.value, {"callback_url": self.callback_url})
        except Exception:
            logger.exception("%s sign-in failed", token.value)
            return None
        finally:
            self.action = None
            self.state = previous

    def reset(self) -> None:
        """Clear a completed registration so another user can be registered."""
        if self.mode is not Mode.register:
            raise ValueError("Only the register form can be reset")
        if self.busy:
            return
        self.fields = FormFields()
        self.errors = {}
        self.error = None
        self.result = None
        self.registered = None
        self.state = FormState.idle

    # ------------------------------------------------------------------
    # Submission strategies
    # ------------------------------------------------------------------

    async def _submit_signup(self, fields: FormFields) -> SubmissionResult:
        resp = await self.http.post(self.signup_url, fields.as_payload(self.mode))
        self.navigator.push(self.signup_redirect_path)
        return SubmissionResult(ok=True, payload=resp.data if isinstance(resp.data, dict) else None)

    async def _submit_register(self, fields: FormFields) -> SubmissionResult:
        sent = fields.as_payload(self.mode)
        resp = await self.http.post(self.register_url, sent)
        self.registered = resp.data if isinstance(resp.data, dict) else dict(sent)
        return SubmissionResult(ok=True, payload=self.registered)

    async def _submit_login(self, fields: FormFields) -> SubmissionResult:
        result = await self.identity.sign_in(
            "credentials",
            {"email": fields.email, "password": fields.password, "redirect": True},
            {"callback_url": self.callback_url},
        )
        error = getattr(result, "error", None)
        if error:
            return SubmissionResult(ok=False, message=error)
        url = getattr(result, "url", None)
        return SubmissionResult(ok=True, payload={"url": url} if url else None)
