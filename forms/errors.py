"""
forms/errors.py -- Turn any submission failure into one displayable string.

The same rule applies to every strategy (signup, register, login):
  1. A non-empty nested response-body "message" wins.
  2. Otherwise the generic fallback.

Failures arrive in two shapes: exceptions carrying .response (RestError and
requests.HTTPError alike) and plain mappings shaped like
{"response": {"data": {"message": ...}}} that some identity adapters raise
as exception args. Both are handled here so callers never branch on shape.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from core.models import GENERIC_ERROR_MESSAGE


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def _response_data(response: Any) -> Any:
    data = _get(response, "data")
    if data is not None:
        return data
    # requests.Response exposes the body through .json()
    json_fn = getattr(response, "json", None)
    if callable(json_fn):
        try:
            return json_fn()
        except ValueError:
            return None
    return None


def extract_message(failure: Any) -> Optional[str]:
    """Return the nested response message, or None when there is none."""
    response = _get(failure, "response")
    if response is None and isinstance(failure, BaseException) and failure.args:
        if isinstance(failure.args[0], Mapping):
            response = failure.args[0].get("response")
    if response is None:
        return None
    message = _get(_response_data(response), "message")
    if isinstance(message, str) and message:
        return message
    return None


def normalize_error(failure: Any) -> str:
    return extract_message(failure) or GENERIC_ERROR_MESSAGE
