"""
Storage Services Package

Provides the abstract key-value interface and its concrete backends.
The file backend is the default on a real device; the in-memory
backend is used for tests and ephemeral sessions.
"""

from expense_tracker.services.storage.interface import (
    BackendUnavailableError,
    CorruptDataError,
    KeyValueBackend,
    QuotaExceededError,
    StorageError,
)
from expense_tracker.services.storage.file import FileBackend
from expense_tracker.services.storage.memory import InMemoryBackend

__all__ = [
    # Interface
    "KeyValueBackend",
    # Exceptions
    "BackendUnavailableError",
    "CorruptDataError",
    "QuotaExceededError",
    "StorageError",
    # Implementations
    "FileBackend",
    "InMemoryBackend",
]
