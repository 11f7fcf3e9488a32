import pytest
import os
import logging
import shutil
import tempfile
from pathlib import Path
from unittest.mock import patch

from recstore.core.record import StudentRecord, RECORD_SIZE
from recstore.storage import RecordStore, StoreStats, StorageError, CorruptionError, SlotDecodeError

_real_open = open


class _ShortWriteFile:
    """File handle whose writes stop one byte short."""

    def __init__(self, f):
        self._f = f

    def write(self, data):
        return self._f.write(data[:-1])

    def __getattr__(self, name):
        return getattr(self._f, name)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self._f.close()


def short_write_open(*args, **kwargs):
    return _ShortWriteFile(_real_open(*args, **kwargs))


class TestStoreExceptions:
    """Tests for the storage exception hierarchy."""

    def test_corruption_error_is_storage_error(self):
        from recstore.core.exceptions import DbException

        error = CorruptionError("truncated")
        assert isinstance(error, StorageError)
        assert isinstance(error, DbException)
        assert str(error) == "truncated"


class TestRecordStore:
    """Tests for fixed-size record I/O."""

    def setup_method(self):
        """Set up test environment before each test."""
        self.temp_dir = tempfile.mkdtemp()
        self.data_file = os.path.join(self.temp_dir, "students.dat")
        self.store = RecordStore(self.data_file, fsync=False)

    def teardown_method(self):
        """Clean up after each test."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _append_raw(self, data: bytes) -> None:
        with open(self.data_file, 'ab') as f:
            f.write(data)

    def test_init_defaults(self):
        store = RecordStore()
        assert store.file_path == Path("students.dat")
        assert store.fsync is True
        assert store.record_size == RECORD_SIZE
        assert store.get_stats() == StoreStats()

    def test_init_does_not_create_file(self):
        assert not Path(self.data_file).exists()
        assert self.store.get_file_size() == 0
        assert self.store.num_slots() == 0

    def test_append_returns_consecutive_offsets(self):
        offsets = [self.store.append(StudentRecord(i, f"S{i}", 7.0)) for i in range(3)]

        assert offsets == [0, 64, 128]
        assert Path(self.data_file).stat().st_size == 3 * RECORD_SIZE
        assert self.store.num_slots() == 3

    def test_append_creates_parent_directory(self):
        store = RecordStore(os.path.join(self.temp_dir, "nested", "dir", "s.dat"), fsync=False)
        assert store.append(StudentRecord(1, "A", 8.0)) == 0

    def test_append_writes_serialized_record(self):
        record = StudentRecord(7, "Ada", 9.1)
        self.store.append(record)
        assert Path(self.data_file).read_bytes() == record.serialize()

    def test_append_refuses_partial_tail(self):
        self.store.append(StudentRecord(1, "A", 8.0))
        self._append_raw(b"xyz")

        with pytest.raises(CorruptionError, match="partial slot"):
            self.store.append(StudentRecord(2, "B", 7.0))

        assert Path(self.data_file).stat().st_size == RECORD_SIZE + 3

    def test_short_append_is_rolled_back(self):
        self.store.append(StudentRecord(1, "A", 8.0))

        with patch("builtins.open", new=short_write_open):
            with pytest.raises(StorageError, match="Short write appending record 2"):
                self.store.append(StudentRecord(2, "B", 7.0))

        assert Path(self.data_file).stat().st_size == RECORD_SIZE
        assert self.store.get_stats().records_written == 1
        assert self.store.append(StudentRecord(3, "C", 6.0)) == RECORD_SIZE

    def test_append_open_failure_is_wrapped(self):
        with patch("builtins.open", side_effect=PermissionError("denied")):
            with pytest.raises(StorageError, match="Failed to append record 1") as exc_info:
                self.store.append(StudentRecord(1, "A", 8.0))

        assert isinstance(exc_info.value.__cause__, PermissionError)
        assert self.store.get_stats().records_written == 0

    def test_append_fsyncs_when_enabled(self):
        store = RecordStore(self.data_file)
        with patch("os.fsync") as mock_fsync:
            store.append(StudentRecord(1, "A", 8.0))
        mock_fsync.assert_called_once()

    def test_append_skips_fsync_when_disabled(self):
        with patch("os.fsync") as mock_fsync:
            self.store.append(StudentRecord(1, "A", 8.0))
        mock_fsync.assert_not_called()

    def test_read_at(self):
        self.store.append(StudentRecord(1, "A", 8.0))
        self.store.append(StudentRecord(2, "B", 7.5))

        assert self.store.read_at(64) == StudentRecord(2, "B", 7.5)
        assert self.store.read_at(0) == StudentRecord(1, "A", 8.0)

    def test_read_at_missing_file(self):
        with pytest.raises(StorageError, match="Data file not found"):
            self.store.read_at(0)

    def test_read_at_negative_or_misaligned_offset(self):
        self.store.append(StudentRecord(1, "A", 8.0))

        with pytest.raises(StorageError, match="not the start of a 64-byte slot"):
            self.store.read_at(-64)

        with pytest.raises(StorageError, match="not the start of a 64-byte slot"):
            self.store.read_at(10)

    def test_read_at_past_end(self):
        self.store.append(StudentRecord(1, "A", 8.0))

        with pytest.raises(StorageError, match="beyond the end") as exc_info:
            self.store.read_at(64)

        assert not isinstance(exc_info.value, CorruptionError)

    def test_read_at_truncated_slot(self):
        self.store.append(StudentRecord(1, "A", 8.0))
        self.store.append(StudentRecord(2, "B", 7.5))
        os.truncate(self.data_file, 100)

        with pytest.raises(CorruptionError, match="truncated"):
            self.store.read_at(64)

        assert self.store.get_stats().corruption_errors == 1

    def test_read_at_undecodable_slot(self):
        self._append_raw(b"A" * RECORD_SIZE)

        with pytest.raises(SlotDecodeError, match="Corrupt slot at offset 0"):
            self.store.read_at(0)

    def test_overwrite_at(self):
        self.store.append(StudentRecord(1, "A", 8.0))
        self.store.append(StudentRecord(2, "B", 7.5))

        self.store.overwrite_at(0, StudentRecord(1, "A", 8.0, deleted=True))

        assert self.store.read_at(0).deleted is True
        assert self.store.read_at(64) == StudentRecord(2, "B", 7.5)
        assert Path(self.data_file).stat().st_size == 2 * RECORD_SIZE

    def test_overwrite_at_short_write(self):
        self.store.append(StudentRecord(1, "A", 8.0))

        with patch("builtins.open", new=short_write_open):
            with pytest.raises(StorageError, match="Short write at offset 0"):
                self.store.overwrite_at(0, StudentRecord(1, "A", 8.0, deleted=True))

        assert Path(self.data_file).stat().st_size == RECORD_SIZE
        assert self.store.get_stats().records_written == 1

    def test_overwrite_at_missing_file(self):
        with pytest.raises(StorageError, match="Data file not found"):
            self.store.overwrite_at(0, StudentRecord(1, "A", 8.0))

        assert not Path(self.data_file).exists()

    def test_overwrite_at_past_end_does_not_extend_file(self):
        self.store.append(StudentRecord(1, "A", 8.0))

        with pytest.raises(StorageError, match="beyond the end"):
            self.store.overwrite_at(64, StudentRecord(2, "B", 7.5))

        assert Path(self.data_file).stat().st_size == RECORD_SIZE

    def test_overwrite_at_misaligned(self):
        self.store.append(StudentRecord(1, "A", 8.0))

        with pytest.raises(StorageError, match="not the start"):
            self.store.overwrite_at(32, StudentRecord(1, "A", 8.0))

    def test_scan_all_missing_file(self):
        assert list(self.store.scan_all()) == []

    def test_scan_all_in_file_order(self):
        records = [StudentRecord(i, f"S{i}", 5.0 + i) for i in (3, 1, 2)]
        for record in records:
            self.store.append(record)

        assert list(self.store.scan_all()) == [
            (0, records[0]), (64, records[1]), (128, records[2])]

    def test_scan_all_includes_tombstones(self):
        self.store.append(StudentRecord(1, "A", 8.0))
        self.store.overwrite_at(0, StudentRecord(1, "A", 8.0, deleted=True))

        [(offset, record)] = list(self.store.scan_all())
        assert offset == 0
        assert record.deleted is True

    def test_scan_all_is_restartable(self):
        self.store.append(StudentRecord(1, "A", 8.0))
        first = list(self.store.scan_all())
        self.store.append(StudentRecord(2, "B", 7.5))
        second = list(self.store.scan_all())

        assert len(first) == 1
        assert len(second) == 2
        assert second[0] == first[0]

    def test_scan_all_is_lazy(self):
        self.store.append(StudentRecord(1, "A", 8.0))
        self._append_raw(b"A" * RECORD_SIZE)

        scan = self.store.scan_all()
        assert next(scan) == (0, StudentRecord(1, "A", 8.0))
        with pytest.raises(CorruptionError):
            next(scan)

    def test_scan_all_closed_early_releases_handle(self):
        self.store.append(StudentRecord(1, "A", 8.0))
        self.store.append(StudentRecord(2, "B", 7.5))
        handles = []

        def tracking_open(*args, **kwargs):
            f = _real_open(*args, **kwargs)
            handles.append(f)
            return f

        with patch("builtins.open", new=tracking_open):
            scan = self.store.scan_all()
            next(scan)

        assert handles[0].closed is False
        scan.close()
        assert handles[0].closed is True

    def test_scan_all_skips_trailing_partial_slot(self, caplog):
        self.store.append(StudentRecord(1, "A", 8.0))
        self._append_raw(b"xyz")

        with caplog.at_level(logging.WARNING, logger="recstore"):
            rows = list(self.store.scan_all())

        assert rows == [(0, StudentRecord(1, "A", 8.0))]
        assert "Ignoring 3 trailing bytes at offset 64" in caplog.text

    def test_stats(self):
        self.store.append(StudentRecord(1, "A", 8.0))
        self.store.append(StudentRecord(2, "B", 7.5))
        self.store.read_at(0)

        stats = self.store.get_stats()
        assert stats.records_written == 2
        assert stats.bytes_written == 2 * RECORD_SIZE
        assert stats.records_read == 1
        assert stats.bytes_read == RECORD_SIZE
        assert stats.corruption_errors == 0

    def test_get_stats_returns_copy(self):
        stats = self.store.get_stats()
        stats.records_written = 99
        assert self.store.get_stats().records_written == 0
