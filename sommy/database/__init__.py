"""Database layer: SQL builders, connection provider and query interface."""

from .connection import ConnectionProvider, build_database_url
from .implementations import get_query_builder, get_schema_builder
from .interfaces import QueryBuilder, SchemaBuilder
from .query_interface import QueryInterface

__all__ = [
    "ConnectionProvider",
    "QueryBuilder",
    "QueryInterface",
    "SchemaBuilder",
    "build_database_url",
    "get_query_builder",
    "get_schema_builder",
]
