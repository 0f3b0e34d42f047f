"""Credential persistence with two slots of differing lifetime.

The *durable* slot holds the session credential and survives restarts.
The *ephemeral* slot holds the resolved account identifier and lives
only as long as the backing storage object (one client lifetime by
default).
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from pypassport._constants import ACCOUNT_ID_SLOT, CREDENTIAL_SLOT
from pypassport.exceptions import PassportStorageError

_logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Minimal string key-value interface backing a storage slot."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class MemoryStorage:
    """Process-local storage; contents vanish with the object."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """JSON-object file storage that survives process restarts.

    A missing file reads as empty. Every write rewrites the whole file
    through a temporary sibling and :func:`os.replace`, so readers never
    observe a half-written document.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise PassportStorageError(f"Cannot read {self._path}: {exc}") from exc

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PassportStorageError(f"Corrupt storage file {self._path}") from exc
        if not isinstance(data, dict):
            raise PassportStorageError(f"Storage file {self._path} does not hold a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.")
        except OSError as exc:
            raise PassportStorageError(f"Cannot write {self._path}: {exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise PassportStorageError(f"Cannot write {self._path}: {exc}") from exc

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


class CredentialStore:
    """Session credential (durable) and account identifier (ephemeral) slots.

    Pure persistence: no network or JSON-value logic lives here.
    """

    def __init__(self, durable: KeyValueStorage, ephemeral: KeyValueStorage) -> None:
        self._durable = durable
        self._ephemeral = ephemeral

    def save_credential(self, credential: str) -> None:
        self._durable.set(CREDENTIAL_SLOT, credential)

    def load_credential(self) -> str | None:
        return self._durable.get(CREDENTIAL_SLOT)

    def clear_credential(self) -> None:
        """Drop the credential and the account identifier together."""
        # An account id must never outlive its credential.
        self._ephemeral.remove(ACCOUNT_ID_SLOT)
        self._durable.remove(CREDENTIAL_SLOT)
        _logger.debug("Session credential cleared")

    def save_account_id(self, account_id: str) -> None:
        self._ephemeral.set(ACCOUNT_ID_SLOT, account_id)

    def load_account_id(self) -> str | None:
        return self._ephemeral.get(ACCOUNT_ID_SLOT)

    def clear_account_id(self) -> None:
        self._ephemeral.remove(ACCOUNT_ID_SLOT)
