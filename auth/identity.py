"""
auth/identity.py -- IdentityClient: the concrete identity provider.

Implements forms.collaborators.IdentityProvider against two backends:

  credentials -- POST {auth_base_url}/callback/credentials with email and
                 password. A rejected login (401/403) is NOT an exception:
                 it comes back as SignInResult(error=...), so the form can
                 show it. Anything else that goes wrong raises RestError.

  google, github -- build the provider's authorization URL through the
                 authlib registry in auth/oauth.py. The caller redirects the
                 browser there; the provider sends the user back to
                 callback_url.

Layer rule: no imports from api/ or forms/.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import requests

from core.http import RestError, decode_body
from core.models import RestResponse, SignInResult

logger = logging.getLogger("formflow.auth.identity")

CREDENTIALS_PROVIDER = "credentials"
# Error code reported for rejected credentials when the server sends no detail.
CREDENTIALS_SIGNIN_ERROR = "CredentialsSignin"


class IdentityClient:
    def __init__(
        self,
        auth_base_url: str,
        oauth_registry: Any,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.auth_base_url = auth_base_url.rstrip("/")
        self.oauth = oauth_registry
        self.timeout = timeout
        self._session = session or requests.Session()

    async def sign_in(
        self,
        provider_id: str,
        params: Optional[dict[str, Any]] = None,
        options: Optional[dict[str, Any]] = None,
    ) -> SignInResult:
        params = params or {}
        options = options or {}
        if provider_id == CREDENTIALS_PROVIDER:
            callback_url = options.get("callback_url") or params.get("callback_url")
            return await asyncio.to_thread(self._sign_in_credentials, params, callback_url)
        return await self._sign_in_social(provider_id, params.get("callback_url") or options.get("callback_url"))

    def _sign_in_credentials(self, params: dict[str, Any], callback_url: Optional[str]) -> SignInResult:
        url = f"{self.auth_base_url}/callback/{CREDENTIALS_PROVIDER}"
        body = {
            "email": params.get("email", ""),
            "password": params.get("password", ""),
            "callbackUrl": callback_url,
        }
        try:
            resp = self._session.post(url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Credentials sign-in transport failure: %s", e)
            raise RestError(str(e)) from e

        data = decode_body(resp)
        if resp.status_code in (401, 403):
            error = data.get("error") if isinstance(data, dict) else None
            logger.info("Credentials sign-in rejected (%d)", resp.status_code)
            return SignInResult(error=error or CREDENTIALS_SIGNIN_ERROR)
        if resp.status_code >= 400:
            raise RestError(
                f"Credentials sign-in returned {resp.status_code}",
                RestResponse(status=resp.status_code, data=data),
            )

        redirect = params.get("redirect", True)
        target = data.get("url") if isinstance(data, dict) else None
        return SignInResult(url=(target or callback_url) if redirect else None)

    async def _sign_in_social(self, provider_id: str, callback_url: Optional[str]) -> SignInResult:
        client = self.oauth.create_client(provider_id)
        if client is None:
            raise ValueError(f"OAuth provider {provider_id!r} is not configured")
        rv = await client.create_authorization_url(redirect_uri=callback_url)
        logger.info("Issued %s authorization URL", provider_id)
        return SignInResult(url=rv["url"])

    def close(self) -> None:
        self._session.close()
