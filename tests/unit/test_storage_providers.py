from __future__ import annotations

from pathlib import Path

import pytest

from culinary.app.domain.errors import (
    StorageError,
    StorageQuotaExceededError,
    StorageUnavailableError,
)
from culinary.app.infra.storage.base import KeyValueStorage
from culinary.app.infra.storage.file_provider import FileKeyValueStorage
from culinary.app.infra.storage.memory_provider import InMemoryKeyValueStorage


class TestFileKeyValueStorage:
    def test_missing_key_returns_none(self, tmp_path: Path) -> None:
        storage = FileKeyValueStorage(tmp_path / "origin")

        assert storage.get_item("culinaryai_history") is None

    def test_set_then_get(self, tmp_path: Path) -> None:
        storage = FileKeyValueStorage(tmp_path / "origin")

        storage.set_item("culinaryai_history", '[{"id": "a"}]')

        assert storage.get_item("culinaryai_history") == '[{"id": "a"}]'
        assert (tmp_path / "origin" / "culinaryai_history.json").exists()

    def test_set_replaces_value_without_leftover_temp_files(self, tmp_path: Path) -> None:
        storage = FileKeyValueStorage(tmp_path)

        storage.set_item("k", "one")
        storage.set_item("k", "two")

        assert storage.get_item("k") == "two"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["k.json"]

    def test_values_persist_across_instances(self, tmp_path: Path) -> None:
        FileKeyValueStorage(tmp_path).set_item("k", "café")

        assert FileKeyValueStorage(tmp_path).get_item("k") == "café"

    def test_remove_item(self, tmp_path: Path) -> None:
        storage = FileKeyValueStorage(tmp_path)
        storage.set_item("k", "value")

        storage.remove_item("k")
        storage.remove_item("k")

        assert storage.get_item("k") is None

    def test_quota_exceeded(self, tmp_path: Path) -> None:
        storage = FileKeyValueStorage(tmp_path, quota_bytes=4)

        with pytest.raises(StorageQuotaExceededError) as exc_info:
            storage.set_item("k", "too long")

        assert exc_info.value.size == 8
        assert exc_info.value.limit == 4
        assert storage.get_item("k") is None

    def test_zero_quota_is_unlimited(self, tmp_path: Path) -> None:
        storage = FileKeyValueStorage(tmp_path, quota_bytes=0)

        storage.set_item("k", "x" * 10_000)

        assert len(storage.get_item("k") or "") == 10_000

    @pytest.mark.parametrize("key", ["../escape", "a/b", "", "spaces here"])
    def test_rejects_unsafe_keys(self, tmp_path: Path, key: str) -> None:
        storage = FileKeyValueStorage(tmp_path)

        with pytest.raises(StorageError):
            storage.set_item(key, "value")

    def test_unwritable_root_raises_unavailable(self, tmp_path: Path) -> None:
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file in the way", encoding="utf-8")
        storage = FileKeyValueStorage(blocker)

        with pytest.raises(StorageUnavailableError):
            storage.set_item("k", "value")


class TestInMemoryKeyValueStorage:
    def test_is_key_value_storage(self) -> None:
        assert isinstance(InMemoryKeyValueStorage(), KeyValueStorage)

    def test_set_get_remove(self) -> None:
        storage = InMemoryKeyValueStorage()

        storage.set_item("k", "v")
        assert storage.get_item("k") == "v"

        storage.remove_item("k")
        storage.remove_item("k")
        assert storage.get_item("k") is None

    def test_disabled_storage_raises(self) -> None:
        storage = InMemoryKeyValueStorage()
        storage.disabled = True

        with pytest.raises(StorageUnavailableError):
            storage.get_item("k")
        with pytest.raises(StorageUnavailableError):
            storage.set_item("k", "v")
        with pytest.raises(StorageUnavailableError):
            storage.remove_item("k")

    def test_quota(self) -> None:
        storage = InMemoryKeyValueStorage(quota_bytes=2)

        with pytest.raises(StorageQuotaExceededError):
            storage.set_item("k", "abc")
