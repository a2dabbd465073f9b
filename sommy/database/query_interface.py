"""Executing SQL builder bound to a connection provider."""

from collections.abc import Mapping, Sequence
from typing import Any

from sommy.data_types import AttributeDefinition
from sommy.database.connection import ConnectionProvider
from sommy.database.implementations import get_query_builder, get_schema_builder
from sommy.database.interfaces import QueryBuilder, SchemaBuilder
from sommy.database.interfaces.query_builder import OrderType
from sommy.log import get_logger
from sommy.types import Dialect, PredicateType, RowType

logger = get_logger(__name__)


class QueryInterface:
    """Builds statements for the provider's dialect and executes them.

    Holds no state besides the provider and the dialect's builders.
    """

    def __init__(self, provider: ConnectionProvider) -> None:
        """Initialize query interface.

        Args:
            provider: Connection provider used for execution, dialect lookup
                and literal quoting
        """
        self.provider = provider
        self.schema_builder: SchemaBuilder = get_schema_builder(
            provider.dialect, provider.quote_literal
        )
        self.query_builder: QueryBuilder = get_query_builder(provider.dialect)

    @property
    def dialect(self) -> Dialect:
        """Dialect of the underlying connection."""
        return self.provider.dialect

    def quote_identifier(self, name: str) -> str:
        """Quote an identifier for the current dialect."""
        return self.query_builder.quote_identifier(name)

    def create_table(
        self,
        table_name: str,
        attributes: Mapping[str, AttributeDefinition],
        *,
        if_not_exists: bool = False,
    ) -> bool:
        """Create a table.

        Args:
            table_name: Name of the table
            attributes: Ordered column definitions
            if_not_exists: Whether to skip creation when the table exists

        Returns:
            True once the statement succeeded
        """
        sql = self.schema_builder.create_table_sql(
            table_name, attributes, if_not_exists=if_not_exists
        )
        self.provider.execute_ddl(sql)
        logger.info(f"Created table {table_name}")
        return True

    def drop_table(self, table_name: str, *, if_exists: bool = True) -> bool:
        """Drop a table."""
        sql = self.schema_builder.drop_table_sql(table_name, if_exists=if_exists)
        self.provider.execute_ddl(sql)
        logger.info(f"Dropped table {table_name}")
        return True

    def add_column(
        self, table_name: str, name: str, attribute: AttributeDefinition
    ) -> bool:
        """Add a column to an existing table."""
        sql = self.schema_builder.add_column_sql(table_name, name, attribute)
        self.provider.execute_ddl(sql)
        return True

    def remove_column(self, table_name: str, name: str) -> bool:
        """Remove a column from an existing table."""
        sql = self.schema_builder.drop_column_sql(table_name, name)
        self.provider.execute_ddl(sql)
        return True

    def table_exists(self, table_name: str) -> bool:
        """Check if a table exists."""
        return self.provider.has_table(table_name)

    def select(
        self,
        table: str,
        columns: Sequence[str] | str | None = None,
        where: PredicateType | None = None,
        *,
        order: OrderType = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[RowType]:
        """Select rows.

        Args:
            table: Table name
            columns: Column specs to select (None for all)
            where: Predicate mapping
            order: Raw ORDER BY text or a column to direction mapping
            limit: Maximum number of rows
            offset: Number of rows to skip

        Returns:
            Matching rows as dictionaries
        """
        sql, params = self.query_builder.select(
            table, columns, where, order=order, limit=limit, offset=offset
        )
        return self.provider.fetch_all(sql, params)

    def insert(
        self, table: str, values: Mapping[str, Any], *, returning: str | None = None
    ) -> str | None:
        """Insert one row.

        Args:
            table: Table name
            values: Column to value mapping
            returning: Primary key column to read back where the dialect
                supports ``RETURNING``

        Returns:
            Generated primary key as a string, or None when nothing was
            inserted or no key was generated
        """
        if not values:
            logger.debug(f"Skipping insert into {table}: no values")
            return None

        sql, params = self.query_builder.insert(table, values, returning=returning)
        return self.provider.insert(sql, params)

    def update(
        self,
        table: str,
        values: Mapping[str, Any],
        where: PredicateType | None = None,
    ) -> int:
        """Update rows.

        Args:
            table: Table name
            values: Column to value mapping to set
            where: Predicate mapping

        Returns:
            Number of affected rows; 0 without executing when values is empty
        """
        if not values:
            logger.debug(f"Skipping update of {table}: no values")
            return 0

        sql, params = self.query_builder.update(table, values, where)
        return self.provider.execute(sql, params)

    def delete(self, table: str, where: PredicateType | None = None) -> int:
        """Delete rows and return the number of affected rows."""
        sql, params = self.query_builder.delete(table, where)
        return self.provider.execute(sql, params)

    def count(self, table: str, where: PredicateType | None = None) -> int:
        """Count rows matching a predicate."""
        sql, params = self.query_builder.count(table, where)
        return int(self.provider.fetch_scalar(sql, params) or 0)
