"""Unit tests for format_store_error."""

from unittest.mock import MagicMock

import pytest
from githubkit.exception import RequestFailed

from github_label_manager.utils.helpers import format_store_error


def make_request_failed(status_code: int, json_body: object = None, json_error: Exception | None = None) -> RequestFailed:
    """Build a RequestFailed around a mocked githubkit response."""
    response = MagicMock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_body
    return RequestFailed(response)


def test_request_failed_uses_api_message() -> None:
    """Test that the status and API message of a githubkit failure are used."""
    error = make_request_failed(422, {"message": "Validation Failed", "errors": [{"code": "already_exists"}]})
    assert format_store_error(error) == "422 - Validation Failed"


def test_request_failed_without_json_body() -> None:
    """Test that a failure without a JSON body still reports its status."""
    error = make_request_failed(502, json_error=ValueError("not json"))
    assert format_store_error(error).startswith("502 - ")


class StatusError(Exception):
    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.status = status


@pytest.mark.parametrize(
    "error,expected",
    [
        (StatusError("Not Found", 404), "404 - Not Found"),
        (RuntimeError("connection reset"), "unknown - connection reset"),
        (TimeoutError(), "unknown - TimeoutError"),
    ],
)
def test_format_other_errors(error: Exception, expected: str) -> None:
    """Test status lookup on plain exceptions, with 'unknown' as fallback."""
    assert format_store_error(error) == expected


def test_status_code_attribute() -> None:
    """Test that a 'status_code' attribute is honoured too."""
    error = Exception("Forbidden")
    error.status_code = 403  # type: ignore[attr-defined]
    assert format_store_error(error) == "403 - Forbidden"
