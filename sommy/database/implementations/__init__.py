"""Dialect implementations and builder factories."""

from collections.abc import Callable

from sommy.database.interfaces import QueryBuilder, SchemaBuilder
from sommy.types import Dialect

from .mysql import (
    MariaDBQueryBuilder,
    MariaDBSchemaBuilder,
    MySQLQueryBuilder,
    MySQLSchemaBuilder,
)
from .postgresql import PostgreSQLQueryBuilder, PostgreSQLSchemaBuilder
from .sqlite import SQLiteQueryBuilder, SQLiteSchemaBuilder

SCHEMA_BUILDERS: dict[Dialect, type[SchemaBuilder]] = {
    Dialect.MYSQL: MySQLSchemaBuilder,
    Dialect.MARIADB: MariaDBSchemaBuilder,
    Dialect.PGSQL: PostgreSQLSchemaBuilder,
    Dialect.SQLITE: SQLiteSchemaBuilder,
}

QUERY_BUILDERS: dict[Dialect, type[QueryBuilder]] = {
    Dialect.MYSQL: MySQLQueryBuilder,
    Dialect.MARIADB: MariaDBQueryBuilder,
    Dialect.PGSQL: PostgreSQLQueryBuilder,
    Dialect.SQLITE: SQLiteQueryBuilder,
}


def get_schema_builder(
    dialect: Dialect | str, quote_literal: Callable[[str], str] | None = None
) -> SchemaBuilder:
    """Create the schema builder for a dialect.

    Args:
        dialect: Target dialect
        quote_literal: String literal quoting function

    Returns:
        Schema builder instance

    Raises:
        ConfigurationError: If the dialect is not supported
    """
    return SCHEMA_BUILDERS[Dialect.parse(dialect)](quote_literal)


def get_query_builder(dialect: Dialect | str) -> QueryBuilder:
    """Create the query builder for a dialect.

    Args:
        dialect: Target dialect

    Returns:
        Query builder instance

    Raises:
        ConfigurationError: If the dialect is not supported
    """
    return QUERY_BUILDERS[Dialect.parse(dialect)]()


__all__ = [
    "SCHEMA_BUILDERS",
    "QUERY_BUILDERS",
    "get_schema_builder",
    "get_query_builder",
    "MySQLQueryBuilder",
    "MySQLSchemaBuilder",
    "MariaDBQueryBuilder",
    "MariaDBSchemaBuilder",
    "PostgreSQLQueryBuilder",
    "PostgreSQLSchemaBuilder",
    "SQLiteQueryBuilder",
    "SQLiteSchemaBuilder",
]
