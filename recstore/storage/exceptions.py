from ..core.exceptions import DbException


class StorageError(DbException):
    """Raised when the data file cannot be opened, read or written"""
    pass


class CorruptionError(StorageError):
    """Raised when a slot is truncated or does not decode"""
    pass


class SlotDecodeError(CorruptionError):
    """Raised when a full slot was read but its fields do not decode"""
    pass
