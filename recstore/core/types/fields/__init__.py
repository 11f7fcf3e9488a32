from .field import Field
from .int_field import IntField
from .string_field import StringField
from .float_field import FloatField

__all__ = ["Field", "IntField", "StringField", "FloatField"]
