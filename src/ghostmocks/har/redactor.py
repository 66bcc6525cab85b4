"""Secret redaction for captured JSON payloads.

Walks a parsed JSON value and replaces sensitive scalars with a fixed
marker. The shape of the value (object keys and their order, array
lengths, nesting) is never changed, and redacting twice gives the same
result as redacting once.
"""

from __future__ import annotations

import re
from typing import Any

from ghostmocks.exceptions import RedactionError

REDACTED = "[REDACTED]"

SECRET_KEYS: frozenset[str] = frozenset(
    {
        "token",
        "apikey",
        "api_key",
        "password",
        "secret",
        "credential",
        "auth",
    }
)

# "Bearer" is matched case-sensitively; the prefix is kept.
BEARER_PATTERN = re.compile(r"(Bearer\s+)[A-Za-z0-9\-._~+/]+=*")


def is_secret_key(key: str) -> bool:
    """Return True if an object key names a secret (case-insensitive)."""
    return key.lower() in SECRET_KEYS


def redact_bearer_tokens(text: str) -> str:
    """Replace the token part of every ``Bearer <token>`` in a string."""
    return BEARER_PATTERN.sub(rf"\g<1>{REDACTED}", text)


def _redact_all(value: Any) -> Any:
    """Replace every scalar leaf under a secret key with the marker."""
    if isinstance(value, dict):
        return {key: _redact_all(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_redact_all(item) for item in value]
    if value is None or isinstance(value, (str, bool, int, float)):
        return REDACTED
    raise RedactionError(f"Cannot redact non-JSON value of type {type(value).__name__}")


def _redact(data: Any) -> Any:
    if isinstance(data, dict):
        redacted: dict[str, Any] = {}
        for key, value in data.items():
            if not isinstance(key, str):
                raise RedactionError(f"Cannot redact object with non-string key {key!r}")
            redacted[key] = _redact_all(value) if is_secret_key(key) else _redact(value)
        return redacted
    if isinstance(data, list):
        return [_redact(item) for item in data]
    if isinstance(data, str):
        return redact_bearer_tokens(data)
    if data is None or isinstance(data, (bool, int, float)):
        return data
    raise RedactionError(f"Cannot redact non-JSON value of type {type(data).__name__}")


def redact_secrets(data: Any) -> Any:
    """Return a copy of a JSON value with secrets replaced by ``[REDACTED]``.

    Args:
        data: Parsed JSON value (dict, list, str, int, float, bool or None).

    Returns:
        Redacted copy. The input is not modified.

    Raises:
        RedactionError: If the value contains a non-JSON type or is nested
            deeper than the interpreter's recursion limit.
    """
    try:
        return _redact(data)
    except RecursionError as exc:
        raise RedactionError("Payload is nested too deeply to redact") from exc
