import logging
from typing import Iterator

from ...core.exceptions import DuplicateKeyError, NotFoundError, InconsistentStateError
from ...core.record import StudentRecord
from ...core.types import IntField
from ...primitives import IndexEntry, RecordStatus
from ..exceptions import SlotDecodeError
from ..record_store import RecordStore

logger = logging.getLogger(__name__)


class PrimaryIndex:
    """
    In-memory map from record id to slot offset for every active record.

    The RecordStore is the source of truth; this index is a cache derived
    from it. rebuild() reconstructs it from a full scan, and add/delete
    keep it in step with the file as they go. Tombstoned slots are never
    indexed.

    Responsibilities:
    1. Reject duplicate ids before any I/O
    2. Resolve ids to offsets for search and delete
    3. Detect drift between the map and the file and surface it
       as InconsistentStateError
    """

    def __init__(self, store: RecordStore):
        """Create an empty index over a store. Call rebuild() to load it."""
        self.store = store
        self._offsets: dict[int, int] = {}

    def rebuild(self) -> int:
        """
        Rebuild the map from a full scan of the store.

        The current map is only replaced once the scan has completed, so a
        failed rebuild leaves the previous state intact.

        Returns:
            Number of active records indexed
        """
        offsets: dict[int, int] = {}
        for offset, record in self.store.scan_all():
            if record.deleted:
                continue
            if record.id in offsets:
                logger.warning(
                    "ID %d is active at offsets %d and %d; indexing the later slot",
                    record.id, offsets[record.id], offset)
                del offsets[record.id]
            offsets[record.id] = offset

        self._offsets = offsets
        logger.info("Index loaded. %d records found.", len(offsets))
        return len(offsets)

    def add(self, record_id: int, name: str, cgpa: float) -> int:
        """
        Append a new active record and index it.

        Returns:
            Offset of the new slot

        Raises:
            DuplicateKeyError: If record_id is already indexed
            ValueError, TypeError: If a value does not fit its field
            StorageError: If the append fails
        """
        IntField(record_id)
        if record_id in self._offsets:
            raise DuplicateKeyError(record_id)

        record = StudentRecord(record_id, name, cgpa)
        offset = self.store.append(record)

        self._offsets[record_id] = offset
        logger.debug("Indexed record %d at offset %d (%d active)",
                     record_id, offset, len(self._offsets))
        return offset

    def search(self, record_id: int) -> StudentRecord:
        """
        Look up an active record by id.

        Raises:
            NotFoundError: If record_id is not indexed
            InconsistentStateError: If the indexed slot is tombstoned, holds
                a different id or does not decode
            StorageError: If the slot cannot be read
        """
        offset = self.get_offset(record_id)
        return self._read_checked(record_id, offset)

    def delete(self, record_id: int) -> None:
        """
        Tombstone a record on disk, then drop it from the index.

        Raises:
            NotFoundError: If record_id is not indexed
            InconsistentStateError: If the indexed slot is already
                tombstoned, holds a different id or does not decode
            StorageError: If the slot cannot be read or rewritten; the index
                is left unchanged
        """
        offset = self.get_offset(record_id)
        record = self._read_checked(record_id, offset)

        self.store.overwrite_at(offset, record.tombstoned())

        del self._offsets[record_id]
        logger.debug("Deleted record %d at offset %d", record_id, offset)

    def list_index(self) -> list[IndexEntry]:
        """Return the index entries in insertion order."""
        return [IndexEntry(record_id, offset)
                for record_id, offset in self._offsets.items()]

    def list_all_records(self) -> Iterator[tuple[int, StudentRecord, RecordStatus]]:
        """
        Yield every slot in the file, tombstones included, with its status.

        Wraps scan_all(), so close() the generator if iteration stops early.
        """
        for offset, record in self.store.scan_all():
            yield offset, record, RecordStatus.of(record.deleted)

    def get_offset(self, record_id: int) -> int:
        """
        Raises:
            NotFoundError: If record_id is not indexed
        """
        try:
            return self._offsets[record_id]
        except KeyError:
            raise NotFoundError(record_id) from None

    def _read_checked(self, record_id: int, offset: int) -> StudentRecord:
        try:
            record = self.store.read_at(offset)
        except SlotDecodeError as e:
            raise InconsistentStateError(
                f"Index maps ID {record_id} to offset {offset}, which holds a corrupt slot") from e

        if record.deleted:
            raise InconsistentStateError(
                f"Index maps ID {record_id} to offset {offset}, which holds a deleted record")
        if record.id != record_id:
            raise InconsistentStateError(
                f"Index maps ID {record_id} to offset {offset}, which holds ID {record.id}")

        return record

    def __len__(self) -> int:
        return len(self._offsets)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._offsets
