"""PostgreSQL implementation package."""

from .query_builder import PostgreSQLQueryBuilder
from .schema_builder import PostgreSQLSchemaBuilder

__all__ = [
    "PostgreSQLQueryBuilder",
    "PostgreSQLSchemaBuilder",
]
