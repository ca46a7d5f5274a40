# culinary/app/infra/storage/file_provider.py
"""
File-backed key-value storage.
Each key is one UTF-8 file inside the origin directory; writes go through a
temp file and os.replace so readers never see a partial value.
"""
from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional

from culinary.app.domain.errors import StorageError, StorageUnavailableError
from culinary.app.infra.storage.base import KeyValueStorage

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9._-]+$")


class FileKeyValueStorage(KeyValueStorage):
    """
    Local storage rooted at a directory (the storage origin).

    Args:
        root: Directory holding one file per key (created lazily)
        quota_bytes: Maximum size of a single value, 0 disables the check
    """

    def __init__(self, root: Path | str, quota_bytes: int = 0):
        self.root = Path(root)
        self.quota_bytes = quota_bytes

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.root / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as error:
            raise StorageUnavailableError(f"Unable to read {path}: {error}") from error

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        self.check_quota(key, value, self.quota_bytes)

        try:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.root)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as error:
            raise StorageUnavailableError(f"Unable to write {path}: {error}") from error

        logger.debug("Stored %s (%d chars)", key, len(value))

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as error:
            raise StorageUnavailableError(f"Unable to remove {path}: {error}") from error
