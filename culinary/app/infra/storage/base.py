# culinary/app/infra/storage/base.py
"""
Abstract base class for local key-value storage.
Mirrors the browser localStorage contract: string keys, string values.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from culinary.app.domain.errors import StorageQuotaExceededError


class KeyValueStorage(ABC):
    """
    Abstract interface for a single storage origin.

    Implementations:
    - FileKeyValueStorage: one file per key under a directory
    - InMemoryKeyValueStorage: dict-backed (for testing)

    Every method may raise StorageError when the backend is unavailable.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored string, or None if the key is absent
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: Storage key
            value: Serialized value

        Raises:
            StorageQuotaExceededError: If the value exceeds the storage quota
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Delete a key. Removing an absent key is a no-op.

        Args:
            key: Storage key
        """
        pass

    def check_quota(self, key: str, value: str, quota_bytes: int) -> None:
        """Raise StorageQuotaExceededError if value is larger than quota_bytes (0 = unlimited)."""
        if quota_bytes <= 0:
            return
        size = len(value.encode("utf-8"))
        if size > quota_bytes:
            raise StorageQuotaExceededError(key, size, quota_bytes)
