"""Hex wire codec for stored values.

The ``account/data`` endpoints only accept values made of a constrained
character set, so every value travels as its JSON text rendered in hex
and prefixed with ``\\x``.

Each UTF-8 byte of the JSON text becomes two lowercase hex digits. For
ASCII text this matches the one-code-unit-per-pair scheme used by older
clients byte for byte; non-ASCII text round-trips correctly instead of
being truncated to a single byte per character.
"""

from __future__ import annotations

import json
import re
from typing import Any

from pypassport._constants import HEX_MARKER
from pypassport.exceptions import PassportMalformedEncodingError

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")


def is_wire_value(text: object) -> bool:
    """Return ``True`` when *text* has the shape of an encoded wire value."""
    if not isinstance(text, str) or not text.startswith(HEX_MARKER):
        return False
    digits = text[len(HEX_MARKER) :]
    return len(digits) > 0 and len(digits) % 2 == 0 and _HEX_DIGITS.fullmatch(digits) is not None


def encode(value: Any) -> str:
    """Serialize *value* to JSON and return its hex wire form.

    Raises :class:`TypeError` or :class:`ValueError` from :mod:`json`
    when *value* is not JSON-serializable.
    """
    text = json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    return HEX_MARKER + text.encode("utf-8").hex()


def decode(wire: str) -> Any:
    """Parse a hex wire value back into the JSON value it encodes.

    Raises
    ------
    PassportMalformedEncodingError
        If the marker is missing, the digit count is zero or odd, a
        non-hex character is present, or the payload is not UTF-8 JSON.
    """
    if not isinstance(wire, str) or not wire.startswith(HEX_MARKER):
        raise PassportMalformedEncodingError(f"Wire value must start with {HEX_MARKER!r}")

    digits = wire[len(HEX_MARKER) :]
    if not digits or len(digits) % 2:
        raise PassportMalformedEncodingError(
            f"Wire value must carry a positive even number of hex digits, got {len(digits)}"
        )
    if _HEX_DIGITS.fullmatch(digits) is None:
        raise PassportMalformedEncodingError("Wire value contains non-hex characters")

    try:
        text = bytes.fromhex(digits).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise PassportMalformedEncodingError("Wire value is not valid UTF-8") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise PassportMalformedEncodingError(f"Wire value is not JSON: {text[:64]}") from exc
