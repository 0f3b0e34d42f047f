"""Session lifecycle: landing capture, account resolution and logout."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum
from urllib.parse import unquote, urlsplit

from pypassport._api.account import fetch_account_id
from pypassport._api.authentication import end_session
from pypassport._constants import LANDING_PARAM
from pypassport._transport import Transport
from pypassport.exceptions import PassportMissingLandingCredentialError, PassportNotLoggedInError
from pypassport.storage import CredentialStore

_logger = logging.getLogger(__name__)


class SessionState(StrEnum):
    NO_CREDENTIAL = "no_credential"
    CREDENTIAL_UNRESOLVED = "credential_unresolved"
    AUTHENTICATED = "authenticated"


def landing_credential(url: str) -> str | None:
    """Extract the landing ``key`` parameter from *url*, if any.

    Parts are percent-decoded only; a literal ``+`` stays ``+``.
    """
    for field in urlsplit(url).query.split("&"):
        name, _, value = field.partition("=")
        if unquote(name) == LANDING_PARAM:
            return unquote(value) or None
    return None


class SessionManager:
    """Owns the transitions between :class:`SessionState` values.

    State is never held on the instance; it is derived from the
    :class:`CredentialStore` so that every component sharing the store
    sees the same session.

    ``NO_CREDENTIAL`` -> ``CREDENTIAL_UNRESOLVED`` via :meth:`capture_landing`
    (or a credential persisted by an earlier run), ``CREDENTIAL_UNRESOLVED``
    -> ``AUTHENTICATED`` via :meth:`ensure_authenticated`, and back to
    ``NO_CREDENTIAL`` via :meth:`logout`.
    """

    def __init__(self, transport: Transport, credentials: CredentialStore) -> None:
        self._transport = transport
        self._credentials = credentials

    @property
    def state(self) -> SessionState:
        if self._credentials.load_credential() is None:
            return SessionState.NO_CREDENTIAL
        if self._credentials.load_account_id() is None:
            return SessionState.CREDENTIAL_UNRESOLVED
        return SessionState.AUTHENTICATED

    @property
    def credential(self) -> str | None:
        return self._credentials.load_credential()

    @property
    def account_id(self) -> str | None:
        """The resolved account identifier, without triggering a lookup."""
        if self._credentials.load_credential() is None:
            return None
        return self._credentials.load_account_id()

    def require_credential(self) -> str:
        credential = self._credentials.load_credential()
        if credential is None:
            raise PassportNotLoggedInError("Not logged in")
        return credential

    def capture_landing(
        self,
        url: str,
        *,
        destination: str | None = None,
        navigate: Callable[[str], None] | None = None,
    ) -> str:
        """Store the credential carried by a landing page URL.

        Should be called once on the landing page after the service
        redirects back. Always starts a fresh session: an existing
        credential is overwritten and any resolved account id dropped.

        Parameters
        ----------
        url : str
            The landing URL, e.g. ``https://app.example/landing?key=...``.
        destination : str or None
            Where to go once the credential is stored.
        navigate : callable or None
            Called with *destination* to replace the current location.

        Raises
        ------
        PassportMissingLandingCredentialError
            If *url* carries no ``key`` parameter. Nothing is written.
        """
        credential = landing_credential(url)
        if credential is None:
            raise PassportMissingLandingCredentialError("Missing key")

        self._credentials.clear_account_id()
        self._credentials.save_credential(credential)
        _logger.debug("Landing credential captured")

        if destination and navigate is not None:
            navigate(destination)
        return credential

    async def ensure_authenticated(self) -> str | None:
        """Resolve and memoize the account identifier.

        Returns the cached identifier without a request when one is
        present. Returns ``None`` when no credential is stored; that is a
        valid unauthenticated state, not an error. Lookup failures
        propagate and leave the session ``CREDENTIAL_UNRESOLVED``.
        """
        credential = self._credentials.load_credential()
        if credential is None:
            return None

        cached = self._credentials.load_account_id()
        if cached is not None:
            return cached

        account_id = await fetch_account_id(self._transport, credential)
        # A logout or new landing while the lookup was in flight wins.
        if self._credentials.load_credential() != credential:
            _logger.debug("Credential changed during account lookup; discarding result")
            return None
        self._credentials.save_account_id(account_id)
        _logger.debug("Account identifier resolved")
        return account_id

    async def logout(self) -> None:
        """End the remote session and clear local session state.

        Local state is cleared whether or not the remote call succeeds;
        a remote failure is raised afterwards.

        Raises
        ------
        PassportNotLoggedInError
            If no credential is stored.
        """
        credential = self.require_credential()
        try:
            await end_session(self._transport, credential)
        finally:
            self._credentials.clear_credential()
            _logger.debug("Logged out")
