"""General utility functions and helper classes."""

from typing import Any

from githubkit.exception import RequestFailed


def _extract_response_message(exc: RequestFailed) -> str | None:
    """Return the API's 'message' field from a failed response, if it has one."""
    try:
        error_data: Any = exc.response.json()
    except Exception:
        return None
    if isinstance(error_data, dict) and isinstance(error_data.get("message"), str):
        return error_data["message"]
    return None


def format_store_error(error: BaseException) -> str:
    """Format a label store failure as a '<status> - <message>' string.

    The status comes from a githubkit response when one is attached, or from a
    'status'/'status_code' attribute on the exception, and is 'unknown'
    otherwise. The message prefers the API's own error message.
    """
    status: Any = None
    message: str | None = None
    if isinstance(error, RequestFailed):
        status = error.response.status_code
        message = _extract_response_message(error)
    if status is None:
        status = getattr(error, "status", None) or getattr(error, "status_code", None)
    if message is None:
        message = str(error) or type(error).__name__
    return f"{status if status is not None else 'unknown'} - {message}"
