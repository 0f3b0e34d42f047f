"""High-level async client for the Passport authentication service."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from pypassport._transport import HttpTransport
from pypassport.config import PassportConfig
from pypassport.data import AccountDataClient
from pypassport.exceptions import PassportError
from pypassport.session import SessionManager, SessionState
from pypassport.storage import CredentialStore, FileStorage, KeyValueStorage, MemoryStorage

_logger = logging.getLogger(__name__)


class PassportClient:
    """Async client for the Passport API.

    Usage::

        async with PassportClient(config) as client:
            client.capture_landing(landing_url)
            await client.load()
            await client.set("theme", {"dark": True})

    The ephemeral account-id slot lives as long as the client; the
    credential slot uses *durable* storage, defaulting to
    ``config.storage_path`` on disk when set.
    """

    def __init__(
        self,
        config: PassportConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        durable: KeyValueStorage | None = None,
        ephemeral: KeyValueStorage | None = None,
    ) -> None:
        self._config = config or PassportConfig()
        self._external_session = session is not None
        self._http_session = session
        if durable is None:
            durable = FileStorage(self._config.storage_path) if self._config.storage_path else MemoryStorage()
        self._credentials = CredentialStore(durable, ephemeral or MemoryStorage())
        self._transport: HttpTransport | None = None
        self._auth: SessionManager | None = None
        self._data: AccountDataClient | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> PassportClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        self._auth = SessionManager(self._transport, self._credentials)
        self._data = AccountDataClient(self._transport, self._auth)
        _logger.debug("Passport client opened (base_url=%s, state=%s)", self._config.base_url, self._auth.state)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None
        self._auth = None
        self._data = None

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    @property
    def config(self) -> PassportConfig:
        return self._config

    @property
    def credentials(self) -> CredentialStore:
        return self._credentials

    @property
    def auth(self) -> SessionManager:
        if self._auth is None:
            raise PassportError("Client not initialized. Use 'async with PassportClient(...) as client:'")
        return self._auth

    @property
    def data(self) -> AccountDataClient:
        if self._data is None:
            raise PassportError("Client not initialized. Use 'async with PassportClient(...) as client:'")
        return self._data

    @property
    def state(self) -> SessionState:
        return self.auth.state

    @property
    def account_id(self) -> str | None:
        return self.auth.account_id

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def capture_landing(
        self,
        url: str,
        *,
        destination: str | None = None,
        navigate: Callable[[str], None] | None = None,
    ) -> str:
        """Store the credential from a landing URL. See :meth:`SessionManager.capture_landing`."""
        return self.auth.capture_landing(url, destination=destination, navigate=navigate)

    async def load(self) -> str | None:
        """Resolve the account identifier if a credential is stored."""
        return await self.auth.ensure_authenticated()

    async def logout(self) -> None:
        """End the session and drop cached account data, then raise any remote error."""
        try:
            await self.auth.logout()
        finally:
            self.data.clear_cache()

    # ------------------------------------------------------------------
    # Account data
    # ------------------------------------------------------------------

    async def add(self, name: str, value: Any) -> dict[str, Any]:
        return await self.data.add(name, value)

    async def get(self, name: str) -> Any:
        return await self.data.get(name)

    async def set(self, name: str, value: Any) -> dict[str, Any]:
        return await self.data.set(name, value)

    async def remove(self, name: str) -> bool:
        return await self.data.remove(name)
