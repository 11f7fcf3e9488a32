"""
Primitive types used throughout the record store.

This module contains basic types that have no dependencies on other parts
of the system, avoiding circular imports.
"""

from .index_entry import IndexEntry
from .record_status import RecordStatus

__all__ = ["IndexEntry", "RecordStatus"]
