from .fields import (
    Field,
    IntField,
    StringField,
    FloatField,
)
from .type_enum import FieldType

__all__ = [
    'Field',
    'IntField',
    'StringField',
    'FloatField',
    'FieldType',
]
