from .record_store import RecordStore, StoreStats
from .index import PrimaryIndex
from .exceptions import StorageError, CorruptionError, SlotDecodeError

__all__ = ["RecordStore", "StoreStats", "PrimaryIndex",
           "StorageError", "CorruptionError", "SlotDecodeError"]
