"""Conversion of API call outcomes into MCP tool results."""

import json
import logging
from collections.abc import Awaitable
from typing import Any

from mcp.types import CallToolResult, TextContent
from pydantic import BaseModel, ValidationError

from reclaim_mcp.errors import ReclaimError, describe_detail, normalize_error
from reclaim_mcp.models.task import EmptySuccess, OpaqueResponse

logger = logging.getLogger(__name__)

# Detail strings at or above this length go into a separate block instead of the message.
SHORT_DETAIL_LIMIT = 150

# Error body fields that are folded into the message line.
_SUMMARY_FIELDS = ("status", "title", "detail", "message")


def _text(text: str) -> TextContent:
    return TextContent(type="text", text=text)


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, OpaqueResponse):
        return value.data
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_unset=not isinstance(value, EmptySuccess))
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


def format_success(result: Any) -> CallToolResult:
    """
    Build a successful tool result.

    None becomes {"success": true}; models, lists and dicts are pretty-printed
    JSON; any other value is converted with str().
    """
    if result is None:
        result = EmptySuccess()

    data = _to_jsonable(result)
    if isinstance(data, (dict, list)):
        text = json.dumps(data, indent=2, default=str)
    elif data is None:
        text = json.dumps({"success": True}, indent=2)
    else:
        text = str(data)

    return CallToolResult(content=[_text(text)])


def _short_detail(detail: Any, message: str) -> str | None:
    """Pick a short, non-duplicate detail string to append to the error message."""
    if not detail:
        return None

    if isinstance(detail, dict):
        inner = detail.get("detail")
        if isinstance(inner, str) and len(inner) < SHORT_DETAIL_LIMIT and inner not in message:
            return inner
        inner = detail.get("message")
        if isinstance(inner, str) and inner not in message:
            return inner
        return None

    if isinstance(detail, str) and len(detail) < SHORT_DETAIL_LIMIT and detail not in message:
        return detail
    return None


def _has_extra_detail(detail: Any, message: str) -> bool:
    """Return True when a structured payload says more than the summary fields already in the message."""
    if isinstance(detail, list):
        return bool(detail)
    if not isinstance(detail, dict):
        return False

    for key, value in detail.items():
        if key == "status" or value is None or value == "":
            continue
        if key not in _SUMMARY_FIELDS:
            return True
        if not isinstance(value, str) or value not in message:
            return True
    return False


def format_error(error: ReclaimError) -> CallToolResult:
    """Build an isError tool result from a normalized error."""
    if error.status is not None:
        user_message = f"Error {error.status}: {error.message}"
    else:
        user_message = f"Error: {error.message}"

    detail = error.detail
    if isinstance(detail, dict):
        title = detail.get("title")
        if isinstance(title, str) and title and title not in user_message:
            user_message += f" - {title}"

    detail_string = _short_detail(detail, user_message)
    if detail_string:
        user_message += f" ({detail_string})"

    content = [_text(user_message)]
    # Local stack traces stay in the logs; only upstream payloads are shown.
    if error.status is not None and _has_extra_detail(detail, user_message):
        content.append(_text(f"Details: {describe_detail(detail)}"))

    return CallToolResult(isError=True, content=content)


async def wrap_api_call(call: Awaitable[Any]) -> CallToolResult:
    """
    Await an API call and format its outcome as an MCP tool result.

    Never raises: every failure becomes a result with isError set.

    Args:
        call: Awaitable returned by a ReclaimClient method

    Returns:
        CallToolResult with JSON text content, or an error result
    """
    try:
        result = await call
    except Exception as e:
        error = normalize_error(e)
        logger.error("MCP tool error: %s (status=%s)", error.message, error.status)
        logger.debug("MCP tool error detail: %r", error.detail)
        try:
            return format_error(error)
        except Exception:
            logger.exception("Failed to format tool error")
            return CallToolResult(isError=True, content=[_text(f"Error: {error.message}")])

    try:
        return format_success(result)
    except Exception as e:
        logger.exception("Failed to format tool result")
        return CallToolResult(isError=True, content=[_text(f"Error: Failed to format result - {e}")])


def validation_error_result(tool_name: str, exc: ValidationError) -> CallToolResult:
    """Turn a pydantic ValidationError into a readable isError tool result."""
    lines = [f"Invalid arguments for {tool_name}:"]
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or "arguments"
        lines.append(f"- {location}: {err.get('msg', 'invalid value')}")
    logger.warning("Validation failed for %s: %s", tool_name, "; ".join(lines[1:]))
    return CallToolResult(isError=True, content=[_text("\n".join(lines))])
