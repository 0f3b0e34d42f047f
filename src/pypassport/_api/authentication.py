"""Authentication endpoint.

Endpoint:
  - DELETE authentication  (key)
"""

from __future__ import annotations

from typing import Any

from pypassport._api._common import call_json
from pypassport._constants import ENDPOINT_AUTHENTICATION
from pypassport._transport import Transport
from pypassport.models.responses import Ack


async def end_session(transport: Transport, credential: str) -> dict[str, Any]:
    """Terminate the remote session identified by *credential*."""
    ack = await call_json(
        transport,
        ENDPOINT_AUTHENTICATION,
        "DELETE",
        Ack,
        query={"key": credential},
    )
    return ack.raw
