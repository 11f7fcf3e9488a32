from enum import Enum


class RecordStatus(Enum):
    """Lifecycle state of a slot in the data file."""
    ACTIVE = "ACTIVE"
    DELETED = "DELETED"

    @classmethod
    def of(cls, deleted: bool) -> 'RecordStatus':
        return cls.DELETED if deleted else cls.ACTIVE
