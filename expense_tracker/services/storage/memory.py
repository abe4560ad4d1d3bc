"""
In-Memory Storage Implementation

Used in tests and for throwaway sessions. An optional byte quota
mimics the size limit of browser local storage, so quota failures
can be exercised without filling a disk.
"""

from typing import Optional

from expense_tracker.services.storage.interface import (
    KeyValueBackend,
    QuotaExceededError,
)


class InMemoryBackend(KeyValueBackend):
    """Dict-backed key-value store."""

    def __init__(
        self,
        initial: Optional[dict[str, str]] = None,
        quota_bytes: Optional[int] = None,
    ):
        """
        Args:
            initial: Blobs to pre-populate, e.g. to simulate a reload
            quota_bytes: Total UTF-8 size allowed across all keys.
                         None means unlimited.
        """
        self._data: dict[str, str] = dict(initial or {})
        self.quota_bytes = quota_bytes

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, blob: str) -> None:
        if self.quota_bytes is not None:
            used = sum(
                len(v.encode("utf-8"))
                for k, v in self._data.items()
                if k != key
            )
            needed = used + len(blob.encode("utf-8"))
            if needed > self.quota_bytes:
                raise QuotaExceededError(
                    f"Writing '{key}' needs {needed} bytes, quota is {self.quota_bytes}"
                )
        self._data[key] = blob

    def snapshot(self) -> dict[str, str]:
        """Copy of everything stored, e.g. to seed another backend."""
        return dict(self._data)
