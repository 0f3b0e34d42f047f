"""Typed success payloads for the Passport endpoints.

Application-level failures (an ``error`` string in an otherwise
successful response) are mapped before validation, so these models only
describe the success shapes.
"""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from pypassport.models._base import PassportBaseModel


class AccountIdResponse(PassportBaseModel):
    """``GET account/uid`` -> ``{"uid": ...}``."""

    uid: str

    @field_validator("uid", mode="before")
    @classmethod
    def _coerce_uid(cls, value: Any) -> Any:
        # Numeric ids are accepted and kept as strings.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("uid")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("uid must be non-empty")
        return value


class ValueResponse(PassportBaseModel):
    """``GET account/data`` -> ``{"value": "\\x..."}``.

    ``value`` is left untyped; shape errors surface from the codec.
    """

    value: Any = None


class DeleteResponse(PassportBaseModel):
    """``DELETE account/data`` -> ``{"success": bool}``."""

    success: bool = False


class Ack(PassportBaseModel):
    """Acknowledgement for create/update/end-session calls."""
