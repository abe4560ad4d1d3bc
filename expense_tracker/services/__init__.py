"""Services package."""

from expense_tracker.services.storage import (
    BackendUnavailableError,
    CorruptDataError,
    FileBackend,
    InMemoryBackend,
    KeyValueBackend,
    QuotaExceededError,
    StorageError,
)

__all__ = [
    "BackendUnavailableError",
    "CorruptDataError",
    "FileBackend",
    "InMemoryBackend",
    "KeyValueBackend",
    "QuotaExceededError",
    "StorageError",
]
