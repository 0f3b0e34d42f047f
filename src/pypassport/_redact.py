"""Helpers for safe debug logging.

Requests carry the session credential in the ``key`` field and account
data in ``value``. This module redacts those before they reach DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset({"key", "value", "uid", "authorization", "cookie"})


def _shorten(value: Any, max_string: int) -> Any:
    if isinstance(value, str) and len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"
    return value


def redact_for_log(value: Mapping[str, Any] | None, *, max_string: int = 512) -> dict[str, Any] | None:
    """Return a copy of a query, body or response object safe for debug logs.

    Sensitive fields are replaced at any mapping depth; long strings
    are truncated.
    """
    if value is None:
        return None

    redacted: dict[str, Any] = {}
    for k, v in value.items():
        key = str(k)
        if key.lower() in _SENSITIVE_VALUE_KEYS:
            redacted[key] = "<redacted>"
        elif isinstance(v, Mapping):
            redacted[key] = redact_for_log(v, max_string=max_string)
        else:
            redacted[key] = _shorten(v, max_string)
    return redacted
