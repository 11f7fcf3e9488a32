import struct
import math
from .field import Field
from ..type_enum import FieldType


class FloatField(Field[float]):
    """
    32-bit floating point field.

    The value is rounded to single precision on construction, so a field
    built in memory compares equal to the same field read back from disk.
    """

    def __init__(self, value):
        """
        Initialize float field with validation.

        Args:
            value: Must be convertible to float

        Raises:
            TypeError: If value cannot be converted to float
            ValueError: If value is NaN or does not fit in single precision
        """
        if value is None:
            raise TypeError("FloatField cannot accept None value")

        try:
            value = float(value)
        except (ValueError, TypeError) as e:
            raise TypeError(
                f"FloatField requires numeric value, got {type(value)}: {e}")

        if math.isnan(value):
            raise ValueError("FloatField does not support NaN values")

        try:
            self.value = struct.unpack('<f', struct.pack('<f', value))[0]
        except OverflowError:
            raise ValueError(
                f"Float value {value} out of single precision range")

    def get_value(self) -> float:
        return self.value

    def get_type(self) -> FieldType:
        return FieldType.FLOAT

    def serialize(self) -> bytes:
        """4 bytes, IEEE 754 single precision, little-endian"""
        return struct.pack('<f', self.value)

    @classmethod
    def deserialize(cls, data: bytes) -> 'FloatField':
        """
        Deserialize float field from bytes.

        Raises:
            ValueError: If data length is not 4 bytes or holds a NaN
            TypeError: If data is not bytes/bytearray
        """
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError(f"Expected bytes or bytearray, got {type(data)}")

        if len(data) != 4:
            raise ValueError(
                f"FloatField requires exactly 4 bytes, got {len(data)}")

        return cls(struct.unpack('<f', data)[0])

    @classmethod
    def get_size(cls) -> int:
        return 4

    def __str__(self) -> str:
        if math.isinf(self.value):
            return "inf" if self.value > 0 else "-inf"
        return f"{self.value:.2f}"
