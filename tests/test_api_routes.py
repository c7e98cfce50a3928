"""
tests/test_api_routes.py -- Integration tests for the /api/v1 routes.

Requests go through the real ASGI stack (middleware, exception handlers,
routers); only the collaborators in app.state are doubles.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from core.config import get_settings
from core.fetcher import FetchError
from core.http import RestError
from core.models import RestResponse, SignInResult

ACCOUNT = {"name": "John Doe", "email": "john.doe@example.com", "password": "password123"}
LOGIN = {"email": "john.doe@example.com", "password": "password123"}


class TestFormRoutes:
    def test_invalid_fields_return_422_with_every_message(self, api_client):
        client, _, http = api_client
        resp = client.post("/api/v1/forms/signup", json={})
        assert resp.status_code == 422
        error = resp.json()["error"]
        assert error["code"] == "validation_error"
        assert error["fields"] == {
            "name": "Name is required",
            "email": "Invalid email address",
            "password": "Password must be at least 6 characters long",
        }
        http.post.assert_not_called()

    def test_unknown_mode_is_rejected(self, api_client):
        client, _, _ = api_client
        resp = client.post("/api/v1/forms/delete", json=LOGIN)
        assert resp.status_code == 422

    def test_signup_success_redirects_home(self, api_client):
        client, _, http = api_client
        resp = client.post("/api/v1/forms/signup", json=ACCOUNT)
        assert resp.status_code == 200
        body = resp.json()
        assert body["state"] == "success"
        assert body["redirect_to"] == "/"
        assert resp.headers["Cache-Control"] == "no-store"
        http.post.assert_awaited_once()

    def test_signup_failure_returns_nested_message(self, api_client):
        client, _, http = api_client
        http.post.side_effect = RestError("400", RestResponse(status=400, data={"message": "Sign up failed"}))
        resp = client.post("/api/v1/forms/signup", json=ACCOUNT)
        assert resp.status_code == 400
        assert resp.json()["error"] == {"code": "submission_failed", "message": "Sign up failed"}

    def test_register_returns_created_record(self, api_client):
        client, _, _ = api_client
        resp = client.post("/api/v1/forms/register", json=ACCOUNT)
        assert resp.status_code == 200
        body = resp.json()
        assert body["payload"]["id"] == 101
        assert body["payload"]["email"] == "john.doe@example.com"
        assert body["redirect_to"] is None

    def test_login_bad_credentials(self, api_client):
        client, identity, _ = api_client
        identity.sign_in.return_value = SignInResult(error="Invalid credentials")
        resp = client.post("/api/v1/forms/login", json=LOGIN)
        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == "Invalid credentials"

    def test_login_success_redirects_to_callback(self, api_client):
        client, identity, _ = api_client
        resp = client.post("/api/v1/forms/login", json={**LOGIN, "name": "ignored"})
        assert resp.status_code == 200
        assert resp.json()["redirect_to"] == "http://localhost:3000"
        assert resp.json()["payload"] is None
        identity.sign_in.assert_awaited_once_with(
            "credentials",
            {"email": "john.doe@example.com", "password": "password123", "redirect": True},
            {"callback_url": "http://localhost:3000"},
        )


class TestSocialRoutes:
    def test_social_sign_in_returns_provider_url(self, api_client):
        client, identity, _ = api_client
        identity.sign_in.return_value = SignInResult(url="https://github.com/login/oauth/authorize?state=x")
        resp = client.post("/api/v1/auth/social/github")
        assert resp.status_code == 200
        assert resp.json() == {"provider": "github", "redirect_to": "https://github.com/login/oauth/authorize?state=x"}
        identity.sign_in.assert_awaited_once_with("github", {"callback_url": "http://localhost:3000"})

    def test_social_failure_is_not_reported(self, api_client):
        client, identity, _ = api_client
        identity.sign_in.side_effect = ValueError("OAuth provider 'google' is not configured")
        resp = client.post("/api/v1/auth/social/google")
        assert resp.status_code == 200
        assert resp.json()["redirect_to"] is None

    def test_credentials_is_not_a_social_route(self, api_client):
        client, _, _ = api_client
        assert client.post("/api/v1/auth/social/credentials").status_code == 422


class TestProviders:
    @pytest.fixture
    def google_configured(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_CLIENT_ID", "google-id")
        monkeypatch.setenv("GOOGLE_CLIENT_SECRET", "google-secret")
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_no_providers_by_default(self, api_client):
        client, _, _ = api_client
        assert client.get("/api/v1/auth/providers").json() == []

    def test_configured_provider_listed(self, api_client, google_configured):
        client, _, _ = api_client
        assert client.get("/api/v1/auth/providers").json() == [{"name": "google", "label": "Google"}]


class TestResourceRoutes:
    def test_users_pass_through(self, api_client):
        client, _, _ = api_client
        with patch("api.routes.v1.resources.fetch_users", return_value=[{"id": 1}]):
            resp = client.get("/api/v1/users")
        assert resp.status_code == 200
        assert resp.json() == [{"id": 1}]

    def test_single_user(self, api_client):
        client, _, _ = api_client
        with patch("api.routes.v1.resources.fetch_user", return_value={"id": 7}) as fetch:
            resp = client.get("/api/v1/users/7")
        assert resp.json() == {"id": 7}
        fetch.assert_called_once_with(7)

    def test_upstream_failure_is_502(self, api_client):
        client, _, _ = api_client
        with patch("api.routes.v1.resources.fetch_photos", side_effect=FetchError("Network response was not ok")):
            resp = client.get("/api/v1/photos")
        assert resp.status_code == 502
        assert resp.json()["error"]["code"] == "upstream_error"
