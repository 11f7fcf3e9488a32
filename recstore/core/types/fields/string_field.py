from .field import Field
from ..type_enum import FieldType


class StringField(Field[str]):
    """
    Field implementation for bounded, NUL-terminated strings.

    Storage format:
    - 50 bytes: UTF-8 encoded content followed by a NUL terminator,
      zero-padded to the full width

    At most 49 bytes of content fit, leaving room for the terminator.
    Anything after the first NUL is ignored on decode, since C writers
    do not always clear the tail of the buffer.
    """
    TOTAL_SIZE = 50
    MAX_LENGTH_IN_BYTES = TOTAL_SIZE - 1

    def __init__(self, value):
        """
        Initialize string field with validation.

        Raises:
            TypeError: If value is not a string
            ValueError: If value contains NUL or its UTF-8 encoding exceeds
                MAX_LENGTH_IN_BYTES
        """
        if not isinstance(value, str):
            raise TypeError(f"StringField requires str, got {type(value)}")

        if '\x00' in value:
            raise ValueError("StringField cannot contain null bytes")

        try:
            encoded = value.encode('utf-8')
        except UnicodeEncodeError as e:
            raise ValueError(f"StringField cannot encode value as UTF-8: {e}")

        if len(encoded) > self.MAX_LENGTH_IN_BYTES:
            raise ValueError(
                f"String too long: {len(encoded)} bytes > {self.MAX_LENGTH_IN_BYTES}")

        self.value = value
        self._encoded = encoded

    def get_value(self) -> str:
        return self.value

    def get_type(self) -> FieldType:
        return FieldType.STRING

    def serialize(self) -> bytes:
        """Content, terminator and zero padding up to TOTAL_SIZE bytes."""
        return self._encoded.ljust(self.TOTAL_SIZE, b'\0')

    @classmethod
    def deserialize(cls, data: bytes) -> 'StringField':
        """
        Create StringField from serialized bytes.

        Raises:
            ValueError: If the data has the wrong length, lacks a terminator
                or is not valid UTF-8
            TypeError: If data is not bytes/bytearray
        """
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError(f"Expected bytes or bytearray, got {type(data)}")

        if len(data) != cls.TOTAL_SIZE:
            raise ValueError(
                f"StringField requires exactly {cls.TOTAL_SIZE} bytes, got {len(data)}")

        end = data.find(b'\0')
        if end < 0:
            raise ValueError("StringField data is not NUL terminated")

        try:
            value = bytes(data[:end]).decode('utf-8')
        except UnicodeDecodeError as e:
            raise ValueError(f"Invalid UTF-8 data in StringField: {e}")

        return cls(value)

    @classmethod
    def get_size(cls) -> int:
        return cls.TOTAL_SIZE

    def __str__(self) -> str:
        return self.value
