"""Database interfaces module."""

from .query_builder import QueryBuilder
from .schema_builder import SchemaBuilder

__all__ = [
    "QueryBuilder",
    "SchemaBuilder",
]
