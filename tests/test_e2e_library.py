from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from pypassport import ErrorKind, Err, Ok, attempt
from pypassport.client import PassportClient
from pypassport.config import PassportConfig
from pypassport.exceptions import (
    PassportError,
    PassportNotLoggedInError,
    PassportRemoteOperationFailedError,
    PassportServiceResponseError,
)
from pypassport.session import SessionState

LANDING_URL = "https://app.example/landing?key=cred-1"


@dataclass
class FakePassportBackend:
    """In-memory stand-in for the Passport service."""

    sessions: dict[str, str] = field(default_factory=lambda: {"cred-1": "uid-1"})
    values: dict[tuple[str, str], str] = field(default_factory=dict)
    calls: dict[str, int] = field(default_factory=dict)
    logout_status: int | None = None

    def _record_call(self, method: str, endpoint: str) -> None:
        call = f"{method} {endpoint}"
        self.calls[call] = self.calls.get(call, 0) + 1

    async def execute(
        self,
        endpoint: str,
        method: str,
        *,
        query: Mapping[str, str] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        self._record_call(method, endpoint)
        params = dict(query or body or {})
        uid = self.sessions.get(params.get("key", ""))

        if endpoint == "authentication" and method == "DELETE":
            if self.logout_status is not None:
                raise PassportServiceResponseError(
                    f"Server responded with {self.logout_status}: ",
                    status_code=self.logout_status,
                    endpoint=endpoint,
                )
            self.sessions.pop(params["key"], None)
            return {"success": True}

        if uid is None:
            return {"error": "Invalid key"}

        if endpoint == "account/uid":
            return {"uid": uid}

        slot = (uid, params["name"])
        if method == "POST":
            if slot in self.values:
                return {"error": "Value already exists"}
            self.values[slot] = params["value"]
            return {"success": True}
        if method == "GET":
            if slot not in self.values:
                return {"error": "Value not found"}
            return {"value": self.values[slot]}
        if method == "PUT":
            self.values[slot] = params["value"]
            return {"success": True}
        if method == "DELETE":
            return {"success": self.values.pop(slot, None) is not None}

        raise AssertionError(f"unexpected call {method} {endpoint}")


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch) -> FakePassportBackend:
    fake_backend = FakePassportBackend()

    async def fake_execute(
        _self: Any,
        endpoint: str,
        method: str,
        *,
        query: Mapping[str, str] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        return await fake_backend.execute(endpoint, method, query=query, body=body)

    monkeypatch.setattr("pypassport._transport.HttpTransport.execute", fake_execute)
    return fake_backend


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_client_happy_path_exercises_full_library(backend: FakePassportBackend) -> None:
    visited: list[str] = []

    async with PassportClient(PassportConfig()) as client:
        assert client.state is SessionState.NO_CREDENTIAL
        client.capture_landing(LANDING_URL, destination="/app", navigate=visited.append)
        assert visited == ["/app"]

        assert await client.load() == "uid-1"
        assert await client.load() == "uid-1"
        assert client.state is SessionState.AUTHENTICATED

        await client.add("prefs", {"theme": "dark"})
        assert await client.get("prefs") == {"theme": "dark"}
        await client.set("prefs", {"theme": "light"})
        assert await client.remove("prefs") is True
        with pytest.raises(PassportRemoteOperationFailedError, match="Value not found"):
            await client.get("prefs")

        await client.set("counter", 3)
        assert backend.values[("uid-1", "counter")] == r"\x33"

        await client.logout()
        assert client.state is SessionState.NO_CREDENTIAL
        assert not client.data.is_cached("counter")

    assert backend.calls["GET account/uid"] == 1
    assert backend.calls["GET account/data"] == 1
    assert backend.calls["DELETE authentication"] == 1
    assert "cred-1" not in backend.sessions


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_credential_survives_restart_but_account_id_does_not(
    backend: FakePassportBackend,
    tmp_path: Path,
) -> None:
    config = PassportConfig(storage_path=str(tmp_path / "passport.json"))

    async with PassportClient(config) as client:
        client.capture_landing(LANDING_URL)
        assert await client.load() == "uid-1"

    async with PassportClient(config) as client:
        assert client.state is SessionState.CREDENTIAL_UNRESOLVED
        assert await client.load() == "uid-1"
        await client.set("restarted", True)

    assert backend.calls["GET account/uid"] == 2
    assert backend.values[("uid-1", "restarted")] == r"\x74727565"


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_logout_service_error_still_logs_out(backend: FakePassportBackend) -> None:
    backend.logout_status = 500

    async with PassportClient() as client:
        client.capture_landing(LANDING_URL)
        await client.load()

        with pytest.raises(PassportServiceResponseError):
            await client.logout()

        assert client.state is SessionState.NO_CREDENTIAL
        assert client.account_id is None
        with pytest.raises(PassportNotLoggedInError):
            await client.get("prefs")


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_cold_cache_add_defers_to_service(backend: FakePassportBackend) -> None:
    backend.values[("uid-1", "prefs")] = r"\x31"

    async with PassportClient() as client:
        client.capture_landing(LANDING_URL)

        outcome = await attempt(client.add("prefs", 2))

    match outcome:
        case Err(error=error):
            assert outcome.kind is ErrorKind.REMOTE_OPERATION_FAILED
            assert str(error) == "Value already exists"
        case Ok():
            pytest.fail("service should reject the duplicate")


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_invalid_credential_stays_unresolved(backend: FakePassportBackend) -> None:
    async with PassportClient() as client:
        client.capture_landing("https://app.example/landing?key=expired")

        with pytest.raises(PassportRemoteOperationFailedError, match="Invalid key"):
            await client.load()
        assert client.state is SessionState.CREDENTIAL_UNRESOLVED


@pytest.mark.asyncio
async def test_client_requires_context_manager() -> None:
    client = PassportClient()

    with pytest.raises(PassportError, match="not initialized"):
        await client.get("prefs")
