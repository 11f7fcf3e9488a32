from enum import Enum


class FieldType(Enum):
    """
    Enum for the column types a record slot can hold.
    """
    INT = "int"
    STRING = "string"
    FLOAT = "float"

    def get_length(self) -> int:
        """Get the length of the field type in bytes."""
        length_map = {
            FieldType.INT: 4,
            FieldType.STRING: 50,
            FieldType.FLOAT: 4,
        }

        return length_map[self]

    def get_alignment(self) -> int:
        """
        Get the byte boundary a field of this type starts on.

        Matches the natural alignment a C compiler gives int, char[] and
        float members, so slots written by C programs decode unchanged.
        """
        alignment_map = {
            FieldType.INT: 4,
            FieldType.STRING: 1,
            FieldType.FLOAT: 4,
        }

        return alignment_map[self]
