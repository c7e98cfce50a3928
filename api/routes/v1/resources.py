"""
api/routes/v1/resources.py -- Read-only pass-through to the mock REST API.

Routes:
  GET /api/v1/users           -- all users
  GET /api/v1/users/{id}      -- one user
  GET /api/v1/posts           -- all posts
  GET /api/v1/photos          -- all photos

Handlers are plain `def` so FastAPI runs the blocking requests calls in its
thread pool. Upstream failures map to 502.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import requests
from fastapi import APIRouter, HTTPException

from core.fetcher import FetchError, fetch_photos, fetch_posts, fetch_user, fetch_users

router = APIRouter()


def _proxy(fetch: Callable[[], Any]) -> Any:
    try:
        return fetch()
    except (FetchError, requests.RequestException) as exc:
        raise HTTPException(
            status_code=502,
            detail={"code": "upstream_error", "message": "Resource API unavailable.", "detail": str(exc)},
        ) from exc


@router.get("/users")
def list_users() -> Any:
    return _proxy(fetch_users)


@router.get("/users/{user_id}")
def get_user(user_id: int) -> Any:
    return _proxy(lambda: fetch_user(user_id))


@router.get("/posts")
def list_posts() -> Any:
    return _proxy(fetch_posts)


@router.get("/photos")
def list_photos() -> Any:
    return _proxy(fetch_photos)
