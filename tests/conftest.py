"""
tests/conftest.py -- Shared test fixtures for FormFlow.

This module provides:
  - identity / http / navigator: collaborator doubles with the real shapes
  - make_workflow: builds a FormWorkflow wired to those doubles
  - api_client: TestClient over the real FastAPI app with a patched lifespan

Design: the workflow takes its collaborators by injection, so no test needs a
running identity service, REST API or browser. The API tests swap the
lifespan so app.state holds the same doubles instead of real clients.

LOGIN_RATE_LIMIT must be raised before api/ is imported: the limit string is
read once when the route decorator runs.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

# CRITICAL: set before any api/ import so the form route is not throttled mid-suite.
os.environ.setdefault("LOGIN_RATE_LIMIT", "1000/minute")

import pytest
from fastapi.testclient import TestClient

from api.main import app
from core.models import RestResponse, SignInResult
from forms.workflow import FormWorkflow

CALLBACK_URL = "http://localhost:3000"
SIGNUP_URL = "http://localhost:8080/user/signup"
REGISTER_URL = "https://jsonplaceholder.typicode.com/posts"


# ---------------------------------------------------------------------------
# Collaborator doubles
# ---------------------------------------------------------------------------


@pytest.fixture
def identity() -> AsyncMock:
    """Identity provider that accepts every sign-in unless a test says otherwise."""
    provider = AsyncMock()
    provider.sign_in.return_value = SignInResult(url=CALLBACK_URL)
    return provider


@pytest.fixture
def http() -> AsyncMock:
    """HTTP client that echoes the posted body back with an id, like the mock API."""
    client = AsyncMock()

    async def _post(url, body):
        return RestResponse(status=201, data={**body, "id": 101})

    client.post.side_effect = _post
    return client


@pytest.fixture
def navigator() -> MagicMock:
    return MagicMock()


@pytest.fixture
def make_workflow(identity, http, navigator):
    """Return a factory: make_workflow(mode, **overrides) -> FormWorkflow."""

    def _make(mode, **kwargs) -> FormWorkflow:
        params = {
            "identity": identity,
            "http": http,
            "navigator": navigator,
            "signup_url": SIGNUP_URL,
            "register_url": REGISTER_URL,
            "callback_url": CALLBACK_URL,
        }
        params.update(kwargs)
        return FormWorkflow(mode, **params)

    return _make


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------


def _patch_lifespan(identity, http):
    """Return an async context manager that replaces the real lifespan.

    Wires the doubles into app.state so routes never open real connections.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.identity = identity
        app.state.http = http
        yield

    return test_lifespan


@pytest.fixture
def api_client(identity, http) -> Generator[tuple[TestClient, AsyncMock, AsyncMock], None, None]:
    """Yield (client, identity, http) for API integration tests."""
    app.router.lifespan_context = _patch_lifespan(identity, http)
    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, identity, http
