"""Shared utilities used across the booking sync layer."""

import hashlib
import re
import uuid
from datetime import datetime

TIME_RANGE_PATTERN = re.compile(r"^(\d{2}:\d{2})-(\d{2}:\d{2})$")


def generate_id(prefix: str) -> str:
    """Return a short stable identifier such as ``CASE-4F2A9C``."""
    return f"{prefix}-{uuid.uuid4().hex[:6].upper()}"


def legacy_id(prefix: str, *parts: object) -> str:
    """Deterministic id for a stored record that predates ids.

    The same record at the same position always gets the same id, so it
    can be addressed before the collection is next written.

    Examples:
        >>> legacy_id("CASE", 0, "Wang Wu", "13700137003") == legacy_id("CASE", 0, "Wang Wu", "13700137003")
        True
    """
    digest = hashlib.sha1("\x1f".join(str(p) for p in parts).encode("utf-8")).hexdigest()
    return f"{prefix}-{digest[:6].upper()}"


def is_valid_date(value: str) -> bool:
    """Validate date is in YYYY-MM-DD format."""
    try:
        datetime.strptime(value.strip(), "%Y-%m-%d")
        return True
    except ValueError:
        return False


def is_valid_time_range(value: str) -> bool:
    """Validate a half-open time range label like ``10:00-11:00``.

    Examples:
        >>> is_valid_time_range("09:00-10:00")
        True
        >>> is_valid_time_range("10:00-09:00")
        False
        >>> is_valid_time_range("ten to eleven")
        False
    """
    match = TIME_RANGE_PATTERN.match(value.strip())
    if not match:
        return False
    try:
        start = datetime.strptime(match.group(1), "%H:%M")
        end = datetime.strptime(match.group(2), "%H:%M")
    except ValueError:
        return False
    return start < end
