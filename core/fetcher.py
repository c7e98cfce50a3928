"""
fetcher.py -- Read-only fetch helpers for the mock REST API.
Thin pass-through wrappers: no retry, no pagination, no caching.
"""

import logging
from typing import Any

import requests

from core.config import get_settings

logger = logging.getLogger("formflow.fetcher")

# Module-level session shared across all fetcher calls for connection pooling.
_session = requests.Session()
_session.max_redirects = 3


class FetchError(Exception):
    """Raised when the resource API answers with anything other than 200."""


def _get(resource: str) -> Any:
    cfg = get_settings()
    url = f"{cfg.resource_api_url.rstrip('/')}/{resource}"
    resp = _session.get(url, timeout=cfg.http_timeout)
    if resp.status_code != 200:
        logger.warning("GET %s returned %d", url, resp.status_code)
        raise FetchError("Network response was not ok")
    return resp.json()


def fetch_users() -> list[dict[str, Any]]:
    return _get("users")


def fetch_user(user_id: int) -> dict[str, Any]:
    return _get(f"users/{user_id}")


def fetch_posts() -> list[dict[str, Any]]:
    return _get("posts")


def fetch_photos() -> list[dict[str, Any]]:
    return _get("photos")
