"""Shared helpers for Passport endpoint calls.

This module centralizes the repeated pattern of every remote call:
- sending through the transport
- mapping the application-level ``error`` field
- validating the success payload into a response model

It is internal to pypassport and may change at any time.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import ValidationError

from pypassport._transport import Transport
from pypassport.exceptions import PassportRemoteOperationFailedError, PassportTransportError
from pypassport.models._base import PassportBaseModel

M = TypeVar("M", bound=PassportBaseModel)


def raise_for_error(*, endpoint: str, response: Mapping[str, Any]) -> None:
    """Raise when a 200 response reports an application-level ``error``."""
    error = response.get("error")
    if error:
        raise PassportRemoteOperationFailedError(str(error), endpoint=endpoint)


async def call_json(
    transport: Transport,
    endpoint: str,
    method: str,
    model: type[M],
    *,
    query: Mapping[str, str] | None = None,
    body: Mapping[str, Any] | None = None,
) -> M:
    """Issue one request and return its validated success payload."""
    response = await transport.execute(endpoint, method, query=query, body=body)
    raise_for_error(endpoint=endpoint, response=response)
    try:
        return model.model_validate(response)
    except ValidationError as exc:
        raise PassportTransportError(
            f"Unexpected response shape from {method} {endpoint}: {exc.error_count()} error(s)",
            endpoint=endpoint,
        ) from exc
