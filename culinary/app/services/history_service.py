# culinary/app/services/history_service.py
"""
Saved search history.
A bounded, newest-first log of SavedSession entries kept under one storage key.
"""
from __future__ import annotations

import json
import logging
import threading
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional
from uuid import uuid4

from pydantic import ValidationError

from culinary.app.config import settings
from culinary.app.domain.errors import InvalidRatingError, PersistenceError, StorageError
from culinary.app.domain.models import LookupResult
from culinary.app.infra.storage.base import KeyValueStorage
from culinary.app.infra.storage.file_provider import FileKeyValueStorage
from culinary.services.types import RecipeRecord, SavedSession, VideoResult

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = settings.HISTORY_CAPACITY
DEFAULT_STORAGE_KEY = settings.HISTORY_STORAGE_KEY


def _now_millis() -> int:
    return int(time.time() * 1000)


def _new_id() -> str:
    return str(uuid4())


class HistoryStore:
    """
    Persistence for past searches.

    Responsibilities:
    - Prepend new sessions and evict the oldest beyond capacity
    - Update the user rating of a session in place
    - List and clear the log

    Every mutation is a full read-modify-write of the serialized log inside
    one lock, so writers in this process never interleave.
    """

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
        capacity: int = DEFAULT_CAPACITY,
        clock: Callable[[], int] = _now_millis,
        id_factory: Callable[[], str] = _new_id,
    ):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        if storage is None:
            storage = FileKeyValueStorage(settings.HISTORY_DIR, quota_bytes=settings.STORAGE_QUOTA_BYTES)
        self._storage = storage
        self.storage_key = storage_key
        self.capacity = capacity
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def _load(self, raw: Optional[str]) -> list[Any]:
        """Stored entries exactly as decoded; writes put them back untouched."""
        if not raw:
            return []
        try:
            payload = json.loads(raw)
        except (ValueError, RecursionError):
            logger.warning("History blob under %s is not valid JSON; treating as empty", self.storage_key)
            return []
        if not isinstance(payload, list):
            logger.warning("History blob under %s is not a list; treating as empty", self.storage_key)
            return []
        return payload

    def _sessions(self, items: list[Any]) -> list[SavedSession]:
        entries: list[SavedSession] = []
        for index, item in enumerate(items):
            try:
                entries.append(SavedSession.model_validate(item))
            except ValidationError as error:
                logger.warning("Skipping unreadable history entry #%d: %s", index, error.error_count())
        return entries

    def _decode(self, raw: Optional[str]) -> list[SavedSession]:
        return self._sessions(self._load(raw))

    def _encode(self, items: list[Any]) -> str:
        return json.dumps(items, ensure_ascii=False)

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[None]:
        with self._lock:
            try:
                yield
            except StorageError as error:
                logger.error("History %s failed: %s", operation, error)
                raise PersistenceError(operation, str(error)) from error
            except (TypeError, ValueError, RecursionError) as error:
                logger.error("History %s could not serialize: %s", operation, error)
                raise PersistenceError(operation, f"serialization failed: {error}") from error

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def append(
        self,
        query: str,
        recipe: RecipeRecord,
        videos: list[VideoResult],
    ) -> SavedSession:
        """
        Save a completed search as the newest entry.

        Args:
            query: The text the user searched for
            recipe: Generated recipe
            videos: Video results shown with it

        Returns:
            The created SavedSession (no user rating yet)

        Raises:
            PersistenceError: If storage could not be read or written
        """
        with self._transaction("append"):
            items = self._load(self._storage.get_item(self.storage_key))
            existing_ids = {item.get("id") for item in items if isinstance(item, dict)}

            session_id = self._id_factory()
            while session_id in existing_ids:
                session_id = self._id_factory()

            session = SavedSession(
                id=session_id,
                timestamp=self._clock(),
                query=query,
                recipe=recipe,
                videos=list(videos),
            )

            items.insert(0, session.model_dump(mode="json", exclude_none=True))
            evicted = len(items) - self.capacity
            items = items[: self.capacity]

            self._storage.set_item(self.storage_key, self._encode(items))

        if evicted > 0:
            logger.info("History full; evicted %d oldest entr%s", evicted, "y" if evicted == 1 else "ies")
        logger.info("Saved history entry %s for query=%r", session.id, query)
        return session

    def list_result(self) -> LookupResult[list[SavedSession]]:
        """Read the log, marking the result as degraded when storage failed."""
        try:
            raw = self._storage.get_item(self.storage_key)
        except StorageError as error:
            logger.warning("Failed to load history: %s", error)
            return LookupResult.degrade([], str(error))
        return LookupResult.ok(self._decode(raw))

    def list(self) -> list[SavedSession]:
        """Return the log newest-first; empty when storage is absent, corrupt or unreadable."""
        return self.list_result().value

    def get(self, session_id: str) -> Optional[SavedSession]:
        for entry in self.list():
            if entry.id == session_id:
                return entry
        return None

    def set_rating(self, session_id: str, rating: int) -> list[SavedSession]:
        """
        Set the user rating of one saved session.

        An unknown id leaves the log unchanged. With duplicate ids only the
        first (newest) match is updated.

        Args:
            session_id: Id of the SavedSession
            rating: Integer from 1 to 5

        Returns:
            The full log after the update

        Raises:
            InvalidRatingError: If rating is not an integer in 1..5
            PersistenceError: If storage could not be read or written
        """
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise InvalidRatingError(rating)

        with self._transaction("set_rating"):
            raw = self._storage.get_item(self.storage_key)
            if raw is None:
                return []

            items = self._load(raw)
            for index, item in enumerate(items):
                if isinstance(item, dict) and item.get("id") == session_id:
                    items[index] = {**item, "userRating": rating}
                    break
            else:
                logger.info("Rating ignored; no history entry %s", session_id)

            self._storage.set_item(self.storage_key, self._encode(items))

        return self._sessions(items)

    def clear(self) -> None:
        """Delete the whole log. Safe to call when nothing is stored."""
        with self._lock:
            try:
                self._storage.remove_item(self.storage_key)
            except StorageError:
                logger.exception("Failed to clear history")
