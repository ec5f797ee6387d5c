"""Sanitize upstream error details before they reach logs or clients."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping

REDACTED_VALUE = "<redacted>"
DEFAULT_MAX_STRING_LENGTH = 256
DEFAULT_MAX_DEPTH = 3

_SENSITIVE_KEY_FRAGMENTS = (
    "api_key",
    "apikey",
    "authorization",
    "token",
    "secret",
    "password",
    "service_role",
    "messages",
    "content",
)

_TOKEN_PATTERNS = (
    re.compile(r"sk-[A-Za-z0-9]{10,}"),
    re.compile(r"(?i)bearer\s+[A-Za-z0-9._-]{10,}"),
    re.compile(r"eyJ[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"),
)


def sanitize_text(value: str, max_length: int = DEFAULT_MAX_STRING_LENGTH) -> str:
    """Redact secrets and cap a string value.

    Args:
        value: Input text value.
        max_length: Maximum length of the returned string.

    Returns:
        A redacted, length-capped string.
    """

    sanitized = value
    for pattern in _TOKEN_PATTERNS:
        sanitized = pattern.sub(REDACTED_VALUE, sanitized)
    if len(sanitized) <= max_length:
        return sanitized
    return f"{sanitized[:max_length]}...[truncated]"


def sanitize_error_details(
    details: Mapping[str, Any],
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_string_length: int = DEFAULT_MAX_STRING_LENGTH,
) -> Dict[str, Any]:
    """Sanitize a structured error details mapping.

    Args:
        details: Mapping of error details to sanitize.
        max_depth: Maximum recursion depth.
        max_string_length: Maximum length for string values.

    Returns:
        A sanitized error details dictionary.
    """

    return _sanitize_value(details, max_depth, max_string_length)


def build_exception_details(
    error: BaseException,
    max_string_length: int = DEFAULT_MAX_STRING_LENGTH,
) -> Dict[str, Any]:
    """Build a sanitized error detail mapping from an exception.

    Args:
        error: Exception to summarize.
        max_string_length: Maximum length for message fields.

    Returns:
        A sanitized error detail dictionary.
    """

    details: Dict[str, Any] = {"error_class": error.__class__.__name__}
    message = str(error)
    if message:
        details["message"] = sanitize_text(message, max_length=max_string_length)
    cause = error.__cause__
    if isinstance(cause, Exception):
        details["cause_class"] = cause.__class__.__name__
        cause_message = str(cause)
        if cause_message:
            details["cause_message"] = sanitize_text(
                cause_message, max_length=max_string_length
            )
    return details


def _sanitize_value(value: Any, depth: int, max_string_length: int) -> Any:
    """Sanitize nested values recursively."""

    if depth <= 0:
        return REDACTED_VALUE
    if isinstance(value, str):
        return sanitize_text(value, max_length=max_string_length)
    if value is None or isinstance(value, (int, float, bool)):
        return value
    if isinstance(value, Mapping):
        sanitized: Dict[str, Any] = {}
        for key, item in value.items():
            key_text = str(key)
            lowered = key_text.lower()
            if any(fragment in lowered for fragment in _SENSITIVE_KEY_FRAGMENTS):
                sanitized[key_text] = REDACTED_VALUE
            else:
                sanitized[key_text] = _sanitize_value(
                    item, depth - 1, max_string_length
                )
        return sanitized
    if isinstance(value, (list, tuple, set)):
        return [_sanitize_value(item, depth - 1, max_string_length) for item in value]
    return sanitize_text(str(value), max_length=max_string_length)
