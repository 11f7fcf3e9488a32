from .exceptions import (
    DbException,
    DuplicateKeyError,
    NotFoundError,
    InconsistentStateError,
)
from .record import RecordDesc, StudentRecord, RECORD_SIZE
from .types import FieldType, Field

__all__ = [
    "DbException",
    "DuplicateKeyError",
    "NotFoundError",
    "InconsistentStateError",
    "RecordDesc",
    "StudentRecord",
    "RECORD_SIZE",
    "FieldType",
    "Field",
]
