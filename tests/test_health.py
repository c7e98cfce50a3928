"""
tests/test_health.py -- Integration tests for GET /api/v1/health.
"""

from __future__ import annotations


def test_health_returns_200_with_version(api_client):
    client, _, _ = api_client
    resp = client.get("/api/v1/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert "version" in data


def test_health_touches_no_collaborator(api_client):
    """Health must not depend on the identity service or the REST API being up."""
    client, identity, http = api_client
    client.get("/api/v1/health")
    identity.sign_in.assert_not_called()
    http.post.assert_not_called()
