from __future__ import annotations

import json
from pathlib import Path

import pytest

from pypassport._constants import ACCOUNT_ID_SLOT, CREDENTIAL_SLOT
from pypassport.exceptions import PassportStorageError
from pypassport.storage import CredentialStore, FileStorage, MemoryStorage


def test_memory_storage_get_set_remove() -> None:
    storage = MemoryStorage()
    assert storage.get("a") is None
    storage.set("a", "1")
    assert storage.get("a") == "1"
    storage.remove("a")
    storage.remove("a")
    assert storage.get("a") is None


def test_file_storage_persists_across_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "passport.json"
    FileStorage(path).set("token", "abc")

    assert FileStorage(path).get("token") == "abc"
    assert json.loads(path.read_text(encoding="utf-8")) == {"token": "abc"}


def test_file_storage_missing_file_reads_empty_and_remove_does_not_create_it(tmp_path: Path) -> None:
    path = tmp_path / "passport.json"
    storage = FileStorage(path)

    assert storage.get("token") is None
    storage.remove("token")
    assert not path.exists()


def test_file_storage_corrupt_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "passport.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(PassportStorageError):
        FileStorage(path).get("token")


def test_file_storage_rejects_non_object_document(tmp_path: Path) -> None:
    path = tmp_path / "passport.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(PassportStorageError):
        FileStorage(path).get("token")


def test_credential_store_uses_separate_slots() -> None:
    durable = MemoryStorage()
    ephemeral = MemoryStorage()
    store = CredentialStore(durable, ephemeral)

    store.save_credential("cred-1")
    store.save_account_id("uid-1")

    assert durable.get(CREDENTIAL_SLOT) == "cred-1"
    assert durable.get(ACCOUNT_ID_SLOT) is None
    assert ephemeral.get(ACCOUNT_ID_SLOT) == "uid-1"
    assert store.load_credential() == "cred-1"
    assert store.load_account_id() == "uid-1"


def test_clear_credential_clears_both_slots() -> None:
    store = CredentialStore(MemoryStorage(), MemoryStorage())
    store.save_credential("cred-1")
    store.save_account_id("uid-1")

    store.clear_credential()

    assert store.load_credential() is None
    assert store.load_account_id() is None


def test_clear_account_id_keeps_credential() -> None:
    store = CredentialStore(MemoryStorage(), MemoryStorage())
    store.save_credential("cred-1")
    store.save_account_id("uid-1")

    store.clear_account_id()

    assert store.load_credential() == "cred-1"
    assert store.load_account_id() is None


def test_file_storage_failed_write_leaves_no_temp_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "passport.json"

    def _fail_replace(_src: str, _dst: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr("pypassport.storage.os.replace", _fail_replace)

    with pytest.raises(PassportStorageError, match="disk full"):
        FileStorage(path).set("token", "abc")

    assert list(tmp_path.iterdir()) == []
