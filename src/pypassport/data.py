"""Per-account named value storage with a local read-through cache."""

from __future__ import annotations

import logging
from typing import Any, Final

from pypassport import _codec
from pypassport._api import account as _account_api
from pypassport._transport import Transport
from pypassport.exceptions import PassportDuplicateKeyError, PassportMalformedEncodingError
from pypassport.session import SessionManager

_logger = logging.getLogger(__name__)


# Cache marker for a name removed during this client's lifetime;
# distinct from a cached JSON null.
_ABSENT: Final = object()


def _require_wire(wire: str) -> None:
    if not _codec.is_wire_value(wire):
        raise PassportMalformedEncodingError("Raw value must be a \\x-prefixed string of hex digit pairs")


class AccountDataClient:
    """Add/get/set/remove JSON values stored under names on the account.

    Every operation requires a stored credential and raises
    :class:`~pypassport.exceptions.PassportNotLoggedInError` before any
    request otherwise.

    The cache is authoritative once populated: :meth:`get` never
    re-fetches a name already read or written by this instance.
    Mutations update the cache before the request is sent and are not
    rolled back if it fails, so after an error the cache is best-effort.
    Overlapping calls for the same name are not ordered or coalesced.
    """

    def __init__(self, transport: Transport, session: SessionManager) -> None:
        self._transport = transport
        self._session = session
        self._cache: dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Cache inspection
    # ------------------------------------------------------------------

    def is_cached(self, name: str) -> bool:
        return self._cache.get(name, _ABSENT) is not _ABSENT

    def cached(self, name: str, default: Any = None) -> Any:
        """Return the cached value for *name* without touching the network."""
        value = self._cache.get(name, _ABSENT)
        return default if value is _ABSENT else value

    def clear_cache(self) -> None:
        self._cache.clear()

    # ------------------------------------------------------------------
    # Decoded values
    # ------------------------------------------------------------------

    async def add(self, name: str, value: Any) -> dict[str, Any]:
        """Create *name* with *value*.

        The duplicate check only consults the local cache. On a cold
        cache a name that already exists remotely is not detected here;
        whatever the service does with the create request applies.

        Raises
        ------
        PassportDuplicateKeyError
            If *name* is already cached.
        """
        credential = self._session.require_credential()
        if self.is_cached(name):
            raise PassportDuplicateKeyError("Key already exists", name=name)

        wire = _codec.encode(value)
        self._cache[name] = value
        return await _account_api.create_value(self._transport, credential, name, wire)

    async def get(self, name: str) -> Any:
        """Return the value stored under *name*, fetching it on a cache miss."""
        credential = self._session.require_credential()
        cached = self._cache.get(name, _ABSENT)
        if cached is not _ABSENT:
            return cached

        wire = await _account_api.read_value(self._transport, credential, name)
        value = _codec.decode(wire)
        self._cache[name] = value
        _logger.debug("Fetched value %r", name)
        return value

    async def set(self, name: str, value: Any) -> dict[str, Any]:
        """Overwrite *name* with *value*; no existence check is made."""
        credential = self._session.require_credential()
        wire = _codec.encode(value)
        self._cache[name] = value
        return await _account_api.update_value(self._transport, credential, name, wire)

    async def remove(self, name: str) -> bool:
        """Delete *name*; returns the service's ``success`` flag."""
        credential = self._session.require_credential()
        self._cache[name] = _ABSENT
        return await _account_api.delete_value(self._transport, credential, name)

    # ------------------------------------------------------------------
    # Raw wire values (bypass the cache)
    # ------------------------------------------------------------------

    async def add_raw(self, name: str, wire: str) -> dict[str, Any]:
        """Create *name* from an already-encoded ``\\x``-prefixed hex string."""
        credential = self._session.require_credential()
        _require_wire(wire)
        return await _account_api.create_value(self._transport, credential, name, wire)

    async def get_raw(self, name: str) -> str:
        """Return the stored value for *name* as its hex wire string."""
        credential = self._session.require_credential()
        wire = await _account_api.read_value(self._transport, credential, name)
        _require_wire(wire)
        return wire

    async def set_raw(self, name: str, wire: str) -> dict[str, Any]:
        """Overwrite *name* with an already-encoded hex wire string."""
        credential = self._session.require_credential()
        _require_wire(wire)
        return await _account_api.update_value(self._transport, credential, name, wire)
