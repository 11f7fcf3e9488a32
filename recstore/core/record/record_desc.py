from typing import Optional
from ..types import Field, FieldType, IntField, StringField, FloatField


_FIELD_CLASSES: dict[FieldType, type[Field]] = {
    FieldType.INT: IntField,
    FieldType.STRING: StringField,
    FieldType.FLOAT: FloatField,
}


def _align(position: int, boundary: int) -> int:
    return (position + boundary - 1) // boundary * boundary


class RecordDesc:
    """
    Byte layout of a fixed-size record slot.

    A RecordDesc lists the field types in slot order and places each one
    on its natural alignment boundary, the way a C compiler lays out a
    struct. Gaps between fields and at the end of the slot are zero
    padding. The total size is rounded up to the widest alignment so
    consecutive slots stay aligned.

    Because the layout is derived from the field types alone, every
    record described by the same RecordDesc has exactly the same size,
    which is what makes offset arithmetic over the data file exact.
    """

    def __init__(self, field_types: list[FieldType], field_names: list[str] | None = None):
        if not field_types:
            raise ValueError("RecordDesc must have at least one field")

        if field_names is not None and len(field_names) != len(field_types):
            raise ValueError(f"Number of field names ({len(field_names)}) "
                             f"must match number of field types ({len(field_types)})")

        self.field_types = field_types.copy()
        self.field_names = field_names.copy() if field_names else None

        self._offsets: list[int] = []
        position = 0
        for field_type in self.field_types:
            position = _align(position, field_type.get_alignment())
            self._offsets.append(position)
            position += field_type.get_length()

        widest = max(t.get_alignment() for t in self.field_types)
        self._size = _align(position, widest)

    def num_fields(self) -> int:
        return len(self.field_types)

    def get_field_type(self, field_index: int) -> FieldType:
        """Get the type of the field at the given index."""
        self._check_index(field_index)
        return self.field_types[field_index]

    def get_field_name(self, field_index: int) -> Optional[str]:
        """Get the name of the field at the given index (if names are defined)."""
        self._check_index(field_index)
        if self.field_names is None:
            return None
        return self.field_names[field_index]

    def name_to_index(self, field_name: str) -> int:
        if self.field_names is None:
            raise ValueError(
                "Cannot lookup field by name - no field names defined")

        try:
            return self.field_names.index(field_name)
        except ValueError:
            raise ValueError(
                f"Field '{field_name}' not found in record descriptor")

    def get_field_offset(self, field_index: int) -> int:
        """Byte offset of the field within a slot."""
        self._check_index(field_index)
        return self._offsets[field_index]

    def get_size(self) -> int:
        """Total slot size in bytes, padding included."""
        return self._size

    def pack(self, fields: list[Field]) -> bytes:
        """
        Serialize fields into one zero-padded slot.

        Raises:
            ValueError: If the fields do not match the descriptor
        """
        if len(fields) != self.num_fields():
            raise ValueError(
                f"Expected {self.num_fields()} fields, got {len(fields)}")

        buf = bytearray(self._size)
        for i, field in enumerate(fields):
            if field.get_type() != self.field_types[i]:
                raise ValueError(
                    f"Field {i} expects {self.field_types[i]}, got {field.get_type()}")
            start = self._offsets[i]
            buf[start:start + field.get_size()] = field.serialize()

        return bytes(buf)

    def unpack(self, data: bytes) -> list[Field]:
        """
        Decode one slot back into its fields. Padding bytes are not inspected.

        Raises:
            ValueError: If data has the wrong length or a field does not decode
        """
        if len(data) != self._size:
            raise ValueError(
                f"Record requires exactly {self._size} bytes, got {len(data)}")

        fields = []
        for i, field_type in enumerate(self.field_types):
            start = self._offsets[i]
            field_data = data[start:start + field_type.get_length()]
            fields.append(_FIELD_CLASSES[field_type].deserialize(field_data))

        return fields

    def _check_index(self, field_index: int) -> None:
        if not (0 <= field_index < len(self.field_types)):
            raise IndexError(
                f"Field index {field_index} out of range [0, {len(self.field_types)})")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RecordDesc) and self.field_types == other.field_types

    def __str__(self) -> str:
        parts = []
        for i, field_type in enumerate(self.field_types):
            name = self.field_names[i] if self.field_names else f"field_{i}"
            parts.append(f"{field_type.value}({name})@{self._offsets[i]}")
        return f"RecordDesc({', '.join(parts)}; size={self._size})"

    def __repr__(self) -> str:
        return self.__str__()
