"""
forms/collaborators.py -- Interfaces the workflow depends on.

The workflow never reaches for a global router or session object; callers
pass implementations of these protocols in. Production wiring lives in
api/main.py; tests pass AsyncMock/MagicMock objects with the same shape.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol

from core.models import RestResponse, SignInResult


class IdentityProvider(Protocol):
    async def sign_in(
        self,
        provider_id: str,
        params: Optional[dict[str, Any]] = None,
        options: Optional[dict[str, Any]] = None,
    ) -> SignInResult:
        """Must return SignInResult(error=...) on bad credentials; may raise on transport failure."""
        ...


class HttpClient(Protocol):
    async def post(self, url: str, body: dict[str, Any]) -> RestResponse: ...


class Navigator(Protocol):
    def push(self, path: str) -> None: ...


class RecordingNavigator:
    """Navigator for server-side use: remembers the target instead of moving a browser."""

    def __init__(self) -> None:
        self.location: Optional[str] = None

    def push(self, path: str) -> None:
        self.location = path
