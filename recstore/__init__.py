"""
Indexed store of fixed-size student records.

A RecordStore owns the data file; a PrimaryIndex maps ids to slot offsets
and is rebuilt from the file whenever a process starts.
"""

from .core import (
    DbException,
    DuplicateKeyError,
    NotFoundError,
    InconsistentStateError,
    StudentRecord,
    RECORD_SIZE,
)
from .primitives import IndexEntry, RecordStatus
from .storage import RecordStore, PrimaryIndex, StorageError, CorruptionError, SlotDecodeError

__all__ = [
    "DbException",
    "DuplicateKeyError",
    "NotFoundError",
    "InconsistentStateError",
    "StorageError",
    "CorruptionError",
    "SlotDecodeError",
    "StudentRecord",
    "RECORD_SIZE",
    "IndexEntry",
    "RecordStatus",
    "RecordStore",
    "PrimaryIndex",
]
