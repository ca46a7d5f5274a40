# culinary/app/infra/storage/memory_provider.py
from __future__ import annotations

from typing import Optional

from culinary.app.domain.errors import StorageUnavailableError
from culinary.app.infra.storage.base import KeyValueStorage


class InMemoryKeyValueStorage(KeyValueStorage):
    """Dict-backed storage. Set `disabled` to emulate storage that refuses access."""

    def __init__(self, quota_bytes: int = 0) -> None:
        self.quota_bytes = quota_bytes
        self.disabled = False
        self._items: dict[str, str] = {}

    def _ensure_enabled(self) -> None:
        if self.disabled:
            raise StorageUnavailableError()

    def get_item(self, key: str) -> Optional[str]:
        self._ensure_enabled()
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._ensure_enabled()
        self.check_quota(key, value, self.quota_bytes)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._ensure_enabled()
        self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)
