import os
import logging
from copy import copy
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator

from ..core.record import StudentRecord, RECORD_SIZE
from .exceptions import StorageError, CorruptionError, SlotDecodeError

logger = logging.getLogger(__name__)


@dataclass
class StoreStats:
    records_read: int = 0
    records_written: int = 0
    bytes_read: int = 0
    bytes_written: int = 0
    corruption_errors: int = 0


class RecordStore:
    """
    Fixed-size record I/O against a single data file.

    The file is a flat sequence of RECORD_SIZE slots with no header. New
    records are only ever appended; the one in-place write is the
    tombstone update issued by the index on delete.

    Every operation opens its own file handle and closes it before
    returning, so no handle state survives between calls and other tools
    may inspect the file in between.
    """

    DEFAULT_FILE = "students.dat"

    def __init__(self, file_path: str | os.PathLike = DEFAULT_FILE, fsync: bool = True):
        """
        Args:
            file_path: Data file; created on the first append
            fsync: Force every write through to the storage device
        """
        self.file_path = Path(file_path)
        self.fsync = fsync
        self.record_size = RECORD_SIZE
        self.stats = StoreStats()

    def append(self, record: StudentRecord) -> int:
        """
        Write a record into a new slot at the end of the file.

        Returns:
            Offset of the new slot (the file length before the write)

        Raises:
            StorageError: If the file cannot be opened or the write fails
            CorruptionError: If the file ends in a partial slot
        """
        data = record.serialize()

        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.file_path, 'ab', buffering=0) as f:
                offset = f.seek(0, os.SEEK_END)
                if offset % self.record_size:
                    self.stats.corruption_errors += 1
                    raise CorruptionError(
                        f"{self.file_path} ends in a partial slot "
                        f"({offset} bytes is not a multiple of {self.record_size})")

                written = f.write(data)
                if written != len(data):
                    f.truncate(offset)
                    raise StorageError(
                        f"Short write appending record {record.id}: "
                        f"{written} of {len(data)} bytes")
                self._sync(f)

        except OSError as e:
            raise StorageError(
                f"Failed to append record {record.id} to {self.file_path}: {e}") from e

        self.stats.records_written += 1
        self.stats.bytes_written += len(data)
        logger.debug("Appended record %d at offset %d", record.id, offset)
        return offset

    def read_at(self, offset: int) -> StudentRecord:
        """
        Read the record whose slot starts at offset.

        Raises:
            StorageError: If the file is missing or offset is out of range
            CorruptionError: If the slot is truncated or does not decode
        """
        self._check_alignment(offset)

        try:
            with open(self.file_path, 'rb') as f:
                self._check_in_range(f, offset)
                f.seek(offset)
                data = f.read(self.record_size)

        except FileNotFoundError as e:
            raise StorageError(f"Data file not found: {self.file_path}") from e
        except OSError as e:
            raise StorageError(
                f"Failed to read offset {offset} from {self.file_path}: {e}") from e

        if len(data) < self.record_size:
            self.stats.corruption_errors += 1
            raise CorruptionError(
                f"Short read at offset {offset}: {len(data)} of {self.record_size} bytes")

        return self._decode(offset, data)

    def overwrite_at(self, offset: int, record: StudentRecord) -> None:
        """
        Rewrite an existing slot in place.

        Raises:
            StorageError: Under the same conditions as read_at, or on a short write
        """
        self._check_alignment(offset)
        data = record.serialize()

        try:
            with open(self.file_path, 'r+b', buffering=0) as f:
                self._check_in_range(f, offset)
                f.seek(offset)
                written = f.write(data)
                if written != len(data):
                    raise StorageError(
                        f"Short write at offset {offset}: {written} of {len(data)} bytes")
                self._sync(f)

        except FileNotFoundError as e:
            raise StorageError(f"Data file not found: {self.file_path}") from e
        except OSError as e:
            raise StorageError(
                f"Failed to write offset {offset} in {self.file_path}: {e}") from e

        self.stats.records_written += 1
        self.stats.bytes_written += len(data)
        logger.debug("Rewrote record %d at offset %d (deleted=%s)",
                     record.id, offset, record.deleted)

    def scan_all(self) -> Iterator[tuple[int, StudentRecord]]:
        """
        Yield (offset, record) for every slot, in file order.

        Each call reopens the file and starts again from offset 0. A
        missing file yields nothing. A trailing partial slot is logged and
        skipped.

        The file stays open while the generator is suspended. A caller that
        stops early should close() the generator to release the handle.

        Raises:
            StorageError: If the file cannot be read
            CorruptionError: If a full slot does not decode
        """
        try:
            f = open(self.file_path, 'rb')
        except FileNotFoundError:
            return
        except OSError as e:
            raise StorageError(f"Failed to open {self.file_path}: {e}") from e

        with f:
            offset = 0
            while True:
                try:
                    data = f.read(self.record_size)
                except OSError as e:
                    raise StorageError(
                        f"Failed to read offset {offset} from {self.file_path}: {e}") from e

                if not data:
                    break

                if len(data) < self.record_size:
                    logger.warning(
                        "Ignoring %d trailing bytes at offset %d in %s (partial slot)",
                        len(data), offset, self.file_path)
                    break

                yield offset, self._decode(offset, data)
                offset += self.record_size

    def num_slots(self) -> int:
        """Number of complete slots in the file."""
        return self.get_file_size() // self.record_size

    def get_file_size(self) -> int:
        """Size of the data file in bytes (0 if it does not exist)."""
        try:
            return self.file_path.stat().st_size
        except FileNotFoundError:
            return 0

    def get_stats(self) -> StoreStats:
        """Return a copy of the I/O counters."""
        return copy(self.stats)

    def _decode(self, offset: int, data: bytes) -> StudentRecord:
        try:
            record = StudentRecord.deserialize(data)
        except ValueError as e:
            self.stats.corruption_errors += 1
            raise SlotDecodeError(f"Corrupt slot at offset {offset}: {e}") from e

        self.stats.records_read += 1
        self.stats.bytes_read += len(data)
        return record

    def _check_alignment(self, offset: int) -> None:
        if offset < 0 or offset % self.record_size:
            raise StorageError(
                f"Offset {offset} is not the start of a {self.record_size}-byte slot")

    def _check_in_range(self, f: BinaryIO, offset: int) -> None:
        size = os.fstat(f.fileno()).st_size
        if offset >= size:
            raise StorageError(
                f"Offset {offset} is beyond the end of {self.file_path} ({size} bytes)")
        if offset + self.record_size > size:
            self.stats.corruption_errors += 1
            raise CorruptionError(
                f"Slot at offset {offset} is truncated ({size - offset} of {self.record_size} bytes)")

    def _sync(self, f: BinaryIO) -> None:
        f.flush()
        if self.fsync:
            os.fsync(f.fileno())
