from dataclasses import dataclass, replace

from ..types import FieldType, IntField, StringField, FloatField
from .record_desc import RecordDesc


# Slot layout, little-endian:
#   0   id       int32
#   4   name     char[50], NUL terminated
#   54  padding  2 bytes
#   56  cgpa     float32
#   60  deleted  int32, 0 = active
STUDENT_DESC = RecordDesc(
    [FieldType.INT, FieldType.STRING, FieldType.FLOAT, FieldType.INT],
    ["id", "name", "cgpa", "deleted"],
)

RECORD_SIZE = STUDENT_DESC.get_size()

if RECORD_SIZE != 64:
    raise RuntimeError(f"Unexpected student record size {RECORD_SIZE}")


@dataclass
class StudentRecord:
    """
    One student row as stored in a data file slot.

    Values are validated against their field types on construction, so an
    invalid id, name or cgpa is rejected before anything touches the disk.
    cgpa is kept at single precision.
    """
    id: int
    name: str
    cgpa: float
    deleted: bool = False

    def __post_init__(self):
        IntField(self.id)
        StringField(self.name)
        self.cgpa = FloatField(self.cgpa).get_value()
        self.deleted = bool(self.deleted)

    def serialize(self) -> bytes:
        """Encode this record into exactly RECORD_SIZE bytes."""
        return STUDENT_DESC.pack([
            IntField(self.id),
            StringField(self.name),
            FloatField(self.cgpa),
            IntField(1 if self.deleted else 0),
        ])

    @classmethod
    def deserialize(cls, data: bytes) -> 'StudentRecord':
        """
        Decode a slot. Any non-zero deleted word counts as deleted.

        Raises:
            ValueError: If the slot is truncated or a field is corrupt
        """
        record_id, name, cgpa, deleted = STUDENT_DESC.unpack(data)
        return cls(
            id=record_id.get_value(),
            name=name.get_value(),
            cgpa=cgpa.get_value(),
            deleted=deleted.get_value() != 0,
        )

    def tombstoned(self) -> 'StudentRecord':
        """Return a copy of this record marked as deleted."""
        return replace(self, deleted=True)
