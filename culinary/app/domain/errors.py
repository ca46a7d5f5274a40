from __future__ import annotations


class HistoryError(Exception):
    pass


class PersistenceError(HistoryError):
    def __init__(self, operation: str, reason: str):
        super().__init__(f"History {operation} failed: {reason}")
        self.operation = operation
        self.reason = reason


class InvalidRatingError(HistoryError, ValueError):
    def __init__(self, rating: object):
        super().__init__(f"Rating must be an integer from 1 to 5, got {rating!r}")
        self.rating = rating


class StorageError(Exception):
    pass


class StorageUnavailableError(StorageError):
    def __init__(self, message: str = "Local storage is unavailable"):
        super().__init__(message)


class StorageQuotaExceededError(StorageError):
    def __init__(self, key: str, size: int, limit: int):
        super().__init__(f"Quota exceeded writing {key}: {size} bytes > {limit} bytes")
        self.key = key
        self.size = size
        self.limit = limit
