from dataclasses import dataclass


@dataclass(frozen=True)
class IndexEntry:
    """
    One primary index entry: a record id and the byte offset of its slot.

    This is the physical address of an active record, similar to a row ID
    in other database systems. Offsets are always multiples of the record
    size.
    """
    id: int
    offset: int

    def __str__(self) -> str:
        return f"IndexEntry(id={self.id}, offset={self.offset})"
