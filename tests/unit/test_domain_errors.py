from __future__ import annotations

import pytest

from culinary.app.domain.errors import (
    HistoryError,
    InvalidRatingError,
    PersistenceError,
    StorageError,
    StorageQuotaExceededError,
    StorageUnavailableError,
)


class TestHistoryError:
    def test_base_exception(self) -> None:
        error = HistoryError("Base error")
        assert str(error) == "Base error"
        assert isinstance(error, Exception)


class TestPersistenceError:
    def test_includes_operation_and_reason(self) -> None:
        error = PersistenceError("append", "disk full")
        assert str(error) == "History append failed: disk full"
        assert error.operation == "append"
        assert error.reason == "disk full"
        assert isinstance(error, HistoryError)


class TestInvalidRatingError:
    def test_keeps_rating(self) -> None:
        error = InvalidRatingError(7)
        assert "7" in str(error)
        assert error.rating == 7

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            raise InvalidRatingError(0)


class TestStorageErrors:
    def test_unavailable_default_message(self) -> None:
        error = StorageUnavailableError()
        assert str(error) == "Local storage is unavailable"
        assert isinstance(error, StorageError)

    def test_quota_exceeded_details(self) -> None:
        error = StorageQuotaExceededError("culinaryai_history", 2048, 1024)
        assert "culinaryai_history" in str(error)
        assert "2048" in str(error)
        assert error.key == "culinaryai_history"
        assert error.size == 2048
        assert error.limit == 1024
        assert isinstance(error, StorageError)

    def test_storage_errors_are_not_history_errors(self) -> None:
        assert not issubclass(StorageError, HistoryError)


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        "error_class",
        [PersistenceError, InvalidRatingError],
    )
    def test_history_errors_inherit_from_base(self, error_class: type) -> None:
        assert issubclass(error_class, HistoryError)

    @pytest.mark.parametrize(
        "error_class",
        [StorageUnavailableError, StorageQuotaExceededError],
    )
    def test_storage_errors_inherit_from_base(self, error_class: type) -> None:
        assert issubclass(error_class, StorageError)
