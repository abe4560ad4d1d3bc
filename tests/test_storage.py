"""
Tests for the key-value storage backends
"""

import errno

import pytest

from expense_tracker.services.storage import (
    BackendUnavailableError,
    CorruptDataError,
    FileBackend,
    InMemoryBackend,
    QuotaExceededError,
)
from expense_tracker.stores import ExpenseStore


class TestInMemoryBackend:
    """Tests for InMemoryBackend."""

    def test_read_missing_key(self):
        """Test reading a key that was never written."""
        assert InMemoryBackend().read("expenses") is None

    def test_write_then_read(self):
        """Test a blob reads back unchanged."""
        backend = InMemoryBackend()
        backend.write("expenses", "[]")
        assert backend.read("expenses") == "[]"

    def test_initial_data(self):
        """Test pre-populated blobs are readable."""
        backend = InMemoryBackend(initial={"budgets": "{}"})
        assert backend.read("budgets") == "{}"

    def test_quota_counts_all_keys(self):
        """Test the quota covers every key, not just the one being written."""
        backend = InMemoryBackend(quota_bytes=10)
        backend.write("a", "123456")
        with pytest.raises(QuotaExceededError):
            backend.write("b", "12345")
        assert backend.read("b") is None

    def test_quota_allows_overwrite_of_same_key(self):
        """Test rewriting a key only counts its new size."""
        backend = InMemoryBackend(quota_bytes=10)
        backend.write("a", "1234567890")
        backend.write("a", "0987654321")
        assert backend.read("a") == "0987654321"

    def test_quota_uses_utf8_size(self):
        """Test multi-byte characters count by their encoded size."""
        backend = InMemoryBackend(quota_bytes=4)
        with pytest.raises(QuotaExceededError):
            backend.write("a", "₹₹")

    def test_snapshot_is_a_copy(self):
        """Test snapshot() cannot be used to mutate the backend."""
        backend = InMemoryBackend()
        backend.write("a", "1")
        snap = backend.snapshot()
        snap["a"] = "2"
        assert backend.read("a") == "1"


class TestFileBackend:
    """Tests for FileBackend."""

    def test_read_missing_key(self, tmp_path):
        """Test reading a key whose file does not exist."""
        assert FileBackend(tmp_path).read("expenses") is None

    def test_write_then_read(self, tmp_path):
        """Test a blob is written to <key>.json and reads back."""
        backend = FileBackend(tmp_path)
        backend.write("expenses", '[{"amount": "1"}]')

        assert (tmp_path / "expenses.json").read_text(encoding="utf-8") == '[{"amount": "1"}]'
        assert backend.read("expenses") == '[{"amount": "1"}]'

    def test_creates_data_dir(self, tmp_path):
        """Test the data directory is created on first write."""
        data_dir = tmp_path / "nested" / "store"
        FileBackend(data_dir).write("budgets", "{}")
        assert (data_dir / "budgets.json").exists()

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        """Test atomic replace cleans up after itself."""
        backend = FileBackend(tmp_path)
        backend.write("expenses", "[]")
        backend.write("expenses", "[1]")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["expenses.json"]

    def test_unicode_round_trip(self, tmp_path):
        """Test non-ASCII notes survive."""
        backend = FileBackend(tmp_path)
        backend.write("expenses", '["chai ☕ ₹20"]')
        assert backend.read("expenses") == '["chai ☕ ₹20"]'

    def test_non_utf8_file_is_corrupt(self, tmp_path):
        """Test undecodable bytes surface as CorruptDataError."""
        (tmp_path / "expenses.json").write_bytes(b"\xff\xfe[garbage")
        with pytest.raises(CorruptDataError, match="UTF-8"):
            FileBackend(tmp_path).read("expenses")

    def test_non_utf8_file_fails_store_load(self, tmp_path):
        """Test a store over an undecodable file refuses to load."""
        (tmp_path / "expenses.json").write_bytes(b"\xff\xfe[garbage")
        with pytest.raises(CorruptDataError):
            ExpenseStore(FileBackend(tmp_path))

    @pytest.mark.parametrize("key", ["", "../escape", "a/b", ".hidden"])
    def test_rejects_unsafe_keys(self, tmp_path, key):
        """Test keys cannot point outside the data directory."""
        with pytest.raises(ValueError, match="Invalid storage key"):
            FileBackend(tmp_path).write(key, "x")

    def test_transient_error_is_retried(self, tmp_path, monkeypatch):
        """Test a single transient failure is retried transparently."""
        backend = FileBackend(tmp_path, write_retries=3)
        real_write = backend._write_atomic
        calls = []

        def flaky(path, blob):
            calls.append(path)
            if len(calls) == 1:
                raise OSError(errno.EIO, "I/O error")
            real_write(path, blob)

        monkeypatch.setattr(backend, "_write_atomic", flaky)
        backend.write("expenses", "[]")

        assert len(calls) == 2
        assert backend.read("expenses") == "[]"

    def test_persistent_error_surfaces(self, tmp_path, monkeypatch):
        """Test repeated failures raise BackendUnavailableError after all attempts."""
        backend = FileBackend(tmp_path, write_retries=2)
        calls = []

        def broken(path, blob):
            calls.append(path)
            raise OSError(errno.EIO, "I/O error")

        monkeypatch.setattr(backend, "_write_atomic", broken)
        with pytest.raises(BackendUnavailableError):
            backend.write("expenses", "[]")
        assert len(calls) == 2

    def test_disk_full_is_quota_error_without_retry(self, tmp_path, monkeypatch):
        """Test ENOSPC maps to QuotaExceededError and is not retried."""
        backend = FileBackend(tmp_path, write_retries=3)
        calls = []

        def full(path, blob):
            calls.append(path)
            raise OSError(errno.ENOSPC, "No space left on device")

        monkeypatch.setattr(backend, "_write_atomic", full)
        with pytest.raises(QuotaExceededError):
            backend.write("expenses", "[]")
        assert len(calls) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
