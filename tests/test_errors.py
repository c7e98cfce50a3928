"""Unit tests for forms/errors.py -- error normalization across failure shapes."""

from unittest.mock import MagicMock

from core.http import RestError
from core.models import RestResponse
from forms.errors import normalize_error


def test_nested_message_wins():
    exc = RestError("400", RestResponse(status=400, data={"message": "Sign up failed"}))
    assert normalize_error(exc) == "Sign up failed"


def test_transport_error_without_response_falls_back():
    assert normalize_error(RestError("connection refused")) == "Something went wrong"


def test_response_without_message_falls_back():
    exc = RestError("500", RestResponse(status=500, data={"detail": "boom"}))
    assert normalize_error(exc) == "Something went wrong"


def test_empty_message_falls_back():
    exc = RestError("400", RestResponse(status=400, data={"message": ""}))
    assert normalize_error(exc) == "Something went wrong"


def test_text_body_falls_back():
    exc = RestError("502", RestResponse(status=502, data="<html>Bad Gateway</html>"))
    assert normalize_error(exc) == "Something went wrong"


def test_mapping_shaped_failure():
    exc = Exception({"response": {"data": {"message": "Email already taken"}}})
    assert normalize_error(exc) == "Email already taken"


def test_requests_style_response_json():
    # requests.HTTPError carries a Response whose body is read through .json()
    response = MagicMock(spec=["json"])
    response.json.return_value = {"message": "Quota exceeded"}
    exc = Exception("429")
    exc.response = response
    assert normalize_error(exc) == "Quota exceeded"


def test_unrelated_exception_falls_back():
    assert normalize_error(RuntimeError("unexpected")) == "Something went wrong"
