"""Custom exceptions for the record store."""


class DbException(Exception):
    """Base exception for record store errors."""
    pass


class DuplicateKeyError(DbException):
    """Raised when adding a record whose id is already indexed."""

    def __init__(self, record_id: int):
        super().__init__(f"Duplicate ID {record_id}; record not added")
        self.record_id = record_id


class NotFoundError(DbException):
    """Raised when an id has no active record in the index."""

    def __init__(self, record_id: int):
        super().__init__(f"Student with ID {record_id} does not exist")
        self.record_id = record_id


class InconsistentStateError(DbException):
    """Raised when the index points at a slot that does not hold its record."""
    pass
