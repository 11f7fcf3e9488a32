from abc import ABC, abstractmethod
from typing import TypeVar, Generic
from ..type_enum import FieldType

T = TypeVar('T')


class Field(ABC, Generic[T]):
    """
    Abstract base class for a single column value of a record.

    Every field has a fixed on-disk width so that a whole record always
    serializes to the same number of bytes. Subclasses provide the
    encoding; the record layout decides where each field goes in a slot.
    """

    @abstractmethod
    def get_value(self) -> T:
        """
        Get the value stored in this field.

        Returns:
            The value of the field with its appropriate type
        """
        pass

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Convert this field to exactly get_size() bytes.
        """
        pass

    @classmethod
    @abstractmethod
    def deserialize(cls, data: bytes) -> 'Field':
        """
        Create field instance from serialized bytes.

        Args:
            data: The bytes to deserialize

        Returns:
            Field instance

        Raises:
            ValueError: If data is invalid or corrupted
        """
        pass

    @classmethod
    @abstractmethod
    def get_size(cls) -> int:
        """
        Get the fixed size in bytes for this field type.
        """
        pass

    @abstractmethod
    def get_type(self) -> FieldType:
        pass

    def __str__(self) -> str:
        return str(self.get_value())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_value()!r})"

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and self.get_value() == other.get_value()

    def __hash__(self) -> int:
        return hash(self.get_value())
