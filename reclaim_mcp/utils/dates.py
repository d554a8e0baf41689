"""Deadline and date normalization for the Reclaim API."""

import logging
import re
from datetime import datetime, timedelta, timezone

logger = logging.getLogger(__name__)

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def format_iso(value: datetime) -> str:
    """Format a datetime as an ISO 8601 UTC string with millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def is_date_only(value: str) -> bool:
    """Return True for a bare `YYYY-MM-DD` string."""
    return bool(_DATE_ONLY.match(value))


def parse_iso_datetime(value: str) -> datetime | None:
    """Parse an ISO 8601 date/time string, returning None when it is not one."""
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_date_only(value: str) -> datetime | None:
    if not is_date_only(value):
        return None
    year, month, day = (int(part) for part in value.split("-"))
    try:
        return datetime(year, month, day, tzinfo=timezone.utc)
    except ValueError:
        return None


def to_day_boundary(value: str) -> str:
    """Turn a bare `YYYY-MM-DD` date into a full UTC midnight timestamp; other values pass through."""
    parsed = _parse_date_only(value)
    if parsed is None:
        return value
    return format_iso(parsed)


def parse_deadline(value: int | str | None) -> str:
    """
    Normalize a deadline/snooze input into an ISO 8601 UTC timestamp.

    Accepts a number of days from now, an ISO 8601 date/time string or a
    `YYYY-MM-DD` date. Anything missing or unparseable defaults to 24 hours
    from now. Never raises.

    Args:
        value: Days from now, a date/datetime string, or None

    Returns:
        ISO 8601 string such as "2025-12-31T23:59:59.999Z"
    """
    now = _now()

    if isinstance(value, int) and not isinstance(value, bool):
        if value <= 0:
            logger.warning("Non-positive day count %r for deadline/snooze, using current time", value)
            return format_iso(now)
        return format_iso(now + timedelta(days=value))

    if isinstance(value, str):
        parsed = parse_iso_datetime(value) or _parse_date_only(value)
        if parsed is not None:
            return format_iso(parsed)
        logger.warning("Failed to parse deadline/snooze input %r, defaulting to 24 hours from now", value)
    elif value is not None:
        logger.warning("Unsupported deadline/snooze input %r, defaulting to 24 hours from now", value)

    return format_iso(now + timedelta(days=1))
