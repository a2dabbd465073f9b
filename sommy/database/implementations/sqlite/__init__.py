"""SQLite implementation package."""

from .query_builder import SQLiteQueryBuilder
from .schema_builder import SQLiteSchemaBuilder

__all__ = [
    "SQLiteQueryBuilder",
    "SQLiteSchemaBuilder",
]
