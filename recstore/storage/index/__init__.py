from .primary_index import PrimaryIndex

__all__ = ["PrimaryIndex"]
