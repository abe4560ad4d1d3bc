"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for the device-local
key-value store. This allows us to:
1. Use in-memory storage for testing
2. Persist to JSON files on a real device
3. Keep the stores decoupled from where bytes end up

The interface is intentionally tiny: read and write a serialized blob
under a key. Serialization belongs to the stores, not the backend.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueBackend(ABC):
    """
    Abstract interface for a device-local key-value store.

    Any backend (in-memory, files, a browser bridge, ...)
    must implement these methods.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """
        Read the blob stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored blob, or None if nothing was ever written

        Raises:
            BackendUnavailableError: If the store cannot be read
        """
        pass

    @abstractmethod
    def write(self, key: str, blob: str) -> None:
        """
        Replace the blob stored under a key.

        Args:
            key: Storage key
            blob: Serialized data to store

        Raises:
            QuotaExceededError: If the store has no room for the blob
            BackendUnavailableError: If the store cannot be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class QuotaExceededError(StorageError):
    """The backend refused a write because it is full."""
    pass


class BackendUnavailableError(StorageError):
    """The backend could not be read or written."""
    pass


class CorruptDataError(StorageError):
    """Persisted data exists but cannot be parsed."""
    pass
