"""Account endpoints.

Endpoints:
  - GET    account/uid   (key)
  - POST   account/data  {key, name, value}
  - GET    account/data  (key, name)
  - PUT    account/data  {key, name, value}
  - DELETE account/data  (key, name)

``value`` is always the hex wire form; encoding happens in the caller.
"""

from __future__ import annotations

from typing import Any

from pypassport._api._common import call_json
from pypassport._constants import ENDPOINT_ACCOUNT_DATA, ENDPOINT_ACCOUNT_UID
from pypassport._transport import Transport
from pypassport.models.responses import AccountIdResponse, Ack, DeleteResponse, ValueResponse


async def fetch_account_id(transport: Transport, credential: str) -> str:
    """Resolve the account identifier behind *credential*."""
    response = await call_json(
        transport,
        ENDPOINT_ACCOUNT_UID,
        "GET",
        AccountIdResponse,
        query={"key": credential},
    )
    return response.uid


async def create_value(transport: Transport, credential: str, name: str, wire: str) -> dict[str, Any]:
    ack = await call_json(
        transport,
        ENDPOINT_ACCOUNT_DATA,
        "POST",
        Ack,
        body={"key": credential, "name": name, "value": wire},
    )
    return ack.raw


async def read_value(transport: Transport, credential: str, name: str) -> Any:
    """Return the stored wire value for *name* (not yet decoded)."""
    response = await call_json(
        transport,
        ENDPOINT_ACCOUNT_DATA,
        "GET",
        ValueResponse,
        query={"key": credential, "name": name},
    )
    return response.value


async def update_value(transport: Transport, credential: str, name: str, wire: str) -> dict[str, Any]:
    ack = await call_json(
        transport,
        ENDPOINT_ACCOUNT_DATA,
        "PUT",
        Ack,
        body={"key": credential, "name": name, "value": wire},
    )
    return ack.raw


async def delete_value(transport: Transport, credential: str, name: str) -> bool:
    response = await call_json(
        transport,
        ENDPOINT_ACCOUNT_DATA,
        "DELETE",
        DeleteResponse,
        query={"key": credential, "name": name},
    )
    return response.success
