"""
File Storage Implementation

DESIGN DECISION: Each key is one JSON file in a data directory.
This mirrors the browser's device-local storage:
1. Scoped to one machine and one user account
2. No server or database setup required
3. Files are human-readable and easy to back up

TRADEOFFS:
- Whole-file rewrites on every mutation (fine for personal data volumes)
- No cross-process locking (the tracker is single-user, single-process)

Writes go to a temporary file that is then renamed over the target,
so a crash mid-write never leaves a half-written collection behind.
"""

import errno
import os
import re
import tempfile
from pathlib import Path
from typing import Optional

import structlog
from tenacity import (
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from expense_tracker.services.storage.interface import (
    BackendUnavailableError,
    CorruptDataError,
    KeyValueBackend,
    QuotaExceededError,
)


_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9_.-]*$")

# Disk-full conditions will not fix themselves on retry
_QUOTA_ERRNOS = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)}


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, OSError) and exc.errno not in _QUOTA_ERRNOS


class FileBackend(KeyValueBackend):
    """
    JSON-file-per-key implementation of the key-value backend.

    Transient OS errors are retried with exponential backoff.
    """

    def __init__(self, data_dir: Path, write_retries: int = 3):
        self.data_dir = Path(data_dir).expanduser()
        self._attempts = write_retries
        self._logger = structlog.get_logger(__name__)

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self._attempts),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
            retry=retry_if_exception(_is_transient),
            reraise=True,
        )

    def read(self, key: str) -> Optional[str]:
        """Read a key's file, or None if it was never written."""
        path = self._path_for(key)
        try:
            for attempt in self._retrying():
                with attempt:
                    if not path.exists():
                        return None
                    return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CorruptDataError(f"Stored data under '{key}' is not valid UTF-8: {e}") from e
        except OSError as e:
            raise BackendUnavailableError(f"Failed to read '{key}': {e}") from e

    def write(self, key: str, blob: str) -> None:
        """Atomically replace a key's file."""
        path = self._path_for(key)
        try:
            for attempt in self._retrying():
                with attempt:
                    if attempt.retry_state.attempt_number > 1:
                        self._logger.warning(
                            "storage_write_retry",
                            key=key,
                            attempt=attempt.retry_state.attempt_number,
                        )
                    self._write_atomic(path, blob)
        except OSError as e:
            if e.errno in _QUOTA_ERRNOS:
                raise QuotaExceededError(f"No space left to write '{key}': {e}") from e
            raise BackendUnavailableError(f"Failed to write '{key}': {e}") from e

    def _write_atomic(self, path: Path, blob: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.stem}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(blob)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            # Never leave temp files behind
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
