"""
core/http.py -- Async REST client used by the form workflow.

requests is blocking, so each call runs in a worker thread via
asyncio.to_thread. The event loop stays free while a submission is in flight,
which is what lets the workflow see (and ignore) a second click.

Failure contract: every non-2xx status and every transport error surfaces as
RestError. When the server answered, RestError.response carries the decoded
body so callers can pull out a nested {"message": ...}.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import requests

from core.models import RestResponse

logger = logging.getLogger("formflow.http")


class RestError(Exception):
    """Raised by RestClient for transport failures and error statuses."""

    def __init__(self, message: str, response: Optional[RestResponse] = None) -> None:
        super().__init__(message)
        self.response = response


def decode_body(resp: requests.Response) -> Any:
    """Return the JSON body, falling back to text (or None when empty)."""
    try:
        return resp.json()
    except ValueError:
        return resp.text or None


class RestClient:
    def __init__(self, timeout: float = 10.0, session: Optional[requests.Session] = None) -> None:
        self.timeout = timeout
        self._session = session or requests.Session()
        # Known endpoints; 3 hops is generous.
        self._session.max_redirects = 3

    async def post(self, url: str, body: dict[str, Any]) -> RestResponse:
        return await asyncio.to_thread(self._post, url, body)

    def _post(self, url: str, body: dict[str, Any]) -> RestResponse:
        try:
            resp = self._session.post(url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("POST %s failed: %s", url, e)
            raise RestError(str(e)) from e

        response = RestResponse(status=resp.status_code, data=decode_body(resp), headers=dict(resp.headers))
        if resp.status_code >= 400:
            logger.info("POST %s returned %d", url, resp.status_code)
            raise RestError(f"POST {url} returned {resp.status_code}", response)
        return response

    def close(self) -> None:
        self._session.close()
