"""Error normalization for Reclaim API calls."""

import json
import logging
import traceback
from typing import Any

import httpx

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred during API call."

# Response body fields tried, in order, for a human-readable message.
_MESSAGE_FIELDS = ("detail", "title", "message")


class ReclaimError(Exception):
    """A failed Reclaim operation with an optional HTTP status and detail payload."""

    def __init__(self, message: str, status: int | None = None, detail: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.detail = detail

    def __repr__(self) -> str:
        return f"ReclaimError(message={self.message!r}, status={self.status!r})"


def _with_context(message: str, context: str | None) -> str:
    if context:
        return f"API Call Failed ({context}): {message}"
    return message


def _response_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON, falling back to raw text."""
    try:
        return response.json()
    except (ValueError, UnicodeDecodeError):
        return response.text or None


def error_from_http_status(exc: httpx.HTTPStatusError, context: str | None = None) -> ReclaimError:
    """
    Build a ReclaimError from a non-2xx upstream response.

    The message is taken from the body's `detail`, `title` or `message` field
    (first non-empty string wins), falling back to the httpx error text.
    """
    status = exc.response.status_code
    body = _response_body(exc.response)

    message = None
    if isinstance(body, dict):
        for field in _MESSAGE_FIELDS:
            value = body.get(field)
            if isinstance(value, str) and value.strip():
                message = value
                break
    if message is None:
        message = str(exc)

    logger.error("Reclaim API error (%s) - status %s: %s", context or "request", status, body or message)
    return ReclaimError(_with_context(message, context), status=status, detail=body)


def error_from_exception(exc: BaseException, context: str | None = None) -> ReclaimError:
    """Build a ReclaimError from any other exception, keeping its traceback as detail."""
    message = str(exc) or type(exc).__name__
    stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error("Error during Reclaim API call (%s): %s", context or "request", message)
    return ReclaimError(
        _with_context(message, context),
        detail={"type": type(exc).__name__, "stack": stack},
    )


def normalize_error(error: object, context: str | None = None) -> ReclaimError:
    """
    Classify anything that went wrong into a ReclaimError.

    Args:
        error: The caught exception, or any other value that was produced as a failure
        context: Optional description of the operation (e.g., "getTask(taskId=5)")

    Returns:
        ReclaimError carrying message, status and detail
    """
    if isinstance(error, ReclaimError):
        return error
    if isinstance(error, httpx.HTTPStatusError):
        return error_from_http_status(error, context)
    if isinstance(error, BaseException):
        return error_from_exception(error, context)

    logger.error("Unexpected non-exception failure (%s): %r", context or "request", error)
    return ReclaimError(_with_context(UNEXPECTED_ERROR_MESSAGE, context), detail=error)


def describe_detail(detail: Any) -> str:
    """Serialize an error detail payload for display."""
    if isinstance(detail, str):
        return detail
    return json.dumps(detail, indent=2, default=str)
