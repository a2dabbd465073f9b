"""MySQL and MariaDB implementation package."""

from .query_builder import MariaDBQueryBuilder, MySQLQueryBuilder
from .schema_builder import MariaDBSchemaBuilder, MySQLSchemaBuilder

__all__ = [
    "MySQLQueryBuilder",
    "MySQLSchemaBuilder",
    "MariaDBQueryBuilder",
    "MariaDBSchemaBuilder",
]
