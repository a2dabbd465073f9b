"""Abstract schema builder for the supported SQL dialects."""

import datetime
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from decimal import Decimal

from sqlalchemy.engine import Dialect as SQLAlchemyDialect

from sommy.data_types import AttributeDefinition
from sommy.database.utils import render_string_literal
from sommy.exceptions import StatementBuildError
from sommy.types import Dialect, Scalar, TypeTag

DEFAULT_VARCHAR_LENGTH = 255


class SchemaBuilder(ABC):
    """Builds DDL statements for one SQL dialect."""

    dialect: Dialect
    type_names: dict[TypeTag, str]

    def __init__(self, quote_literal: Callable[[str], str] | None = None) -> None:
        """Initialize schema builder.

        Args:
            quote_literal: String literal quoting function, usually the
                connection provider's; defaults to SQLAlchemy's rendering for
                this dialect
        """
        self._quote_literal = quote_literal or self._render_literal

    @classmethod
    @abstractmethod
    def sqlalchemy_dialect(cls) -> SQLAlchemyDialect:
        """Offline SQLAlchemy dialect used for literal rendering."""
        pass

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Quote a table or column identifier."""
        pass

    @abstractmethod
    def primary_key_inline(self, attribute: AttributeDefinition) -> bool:
        """Check if the column type carries its own PRIMARY KEY clause."""
        pass

    @abstractmethod
    def integer_type(self, attribute: AttributeDefinition, inline_pk: bool) -> str:
        """Map an integer column, including AUTO_INCREMENT/PRIMARY KEY parts."""
        pass

    def _render_literal(self, value: str) -> str:
        return render_string_literal(value, self.sqlalchemy_dialect())

    def map_type(
        self, attribute: AttributeDefinition, inline_primary_key: bool = True
    ) -> str:
        """Map a column definition to its SQL type clause.

        Args:
            attribute: Column definition
            inline_primary_key: Whether an inline PRIMARY KEY may be emitted

        Returns:
            Dialect-specific type clause
        """
        if attribute.type.is_integer:
            inline_pk = inline_primary_key and self.primary_key_inline(attribute)
            return self.integer_type(attribute, inline_pk)

        if attribute.type == TypeTag.VARCHAR:
            length = attribute.length
            if length is None:
                length = DEFAULT_VARCHAR_LENGTH
            return f"VARCHAR({length})"

        if attribute.type == TypeTag.DECIMAL:
            if attribute.precision is None:
                return "DECIMAL"
            return f"DECIMAL({attribute.precision},{attribute.scale or 0})"

        return self.type_names[attribute.type]

    def render_default(self, value: Scalar) -> str:
        """Render a DEFAULT literal."""
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, str):
            return self._quote_literal(value)
        if isinstance(value, (datetime.date, datetime.time)):
            return self._quote_literal(value.isoformat())
        raise StatementBuildError(f"Unsupported default value: {value!r}")

    def column_sql(
        self,
        name: str,
        attribute: AttributeDefinition,
        inline_primary_key: bool = True,
    ) -> str:
        """Generate one column clause of a CREATE TABLE statement.

        Args:
            name: Column name
            attribute: Column definition
            inline_primary_key: Whether an inline PRIMARY KEY may be emitted

        Returns:
            Column clause
        """
        parts = [
            self.quote_identifier(name),
            self.map_type(attribute, inline_primary_key),
        ]

        if not attribute.allow_null and not attribute.primary_key:
            parts.append("NOT NULL")

        if attribute.unique:
            parts.append("UNIQUE")

        if attribute.has_default and not attribute.auto_increment:
            parts.append(f"DEFAULT {self.render_default(attribute.default)}")

        return " ".join(parts)

    def create_table_sql(
        self,
        table_name: str,
        attributes: Mapping[str, AttributeDefinition],
        *,
        if_not_exists: bool = False,
    ) -> str:
        """Generate CREATE TABLE SQL.

        A table-level ``PRIMARY KEY (...)`` clause lists every primary key
        column when none of them got an inline primary key. Composite keys
        always use the table-level clause. Only declared key columns, or the
        first self-keyed column of a table without any, get an inline key.

        Args:
            table_name: Name of the table
            attributes: Ordered column definitions
            if_not_exists: Whether to add ``IF NOT EXISTS``

        Returns:
            CREATE TABLE SQL statement
        """
        if not attributes:
            raise StatementBuildError(
                f"Cannot create table {table_name} without columns"
            )

        primary_keys = [name for name, attr in attributes.items() if attr.primary_key]
        inline_allowed = len(primary_keys) <= 1

        column_defs: list[str] = []
        inline_used = False
        for name, attribute in attributes.items():
            # Declared key columns take precedence over self-keyed types
            inline = (
                inline_allowed
                and not inline_used
                and (not primary_keys or name in primary_keys)
            )
            column_defs.append(self.column_sql(name, attribute, inline))
            if inline and self.primary_key_inline(attribute):
                inline_used = True

        if primary_keys and not inline_used:
            key_columns = ", ".join(self.quote_identifier(col) for col in primary_keys)
            column_defs.append(f"PRIMARY KEY ({key_columns})")

        exists_sql = "IF NOT EXISTS " if if_not_exists else ""
        columns_sql = ", ".join(column_defs)
        return (
            f"CREATE TABLE {exists_sql}{self.quote_identifier(table_name)} "
            f"({columns_sql})"
        )

    def drop_table_sql(self, table_name: str, *, if_exists: bool = True) -> str:
        """Generate DROP TABLE SQL."""
        exists_sql = "IF EXISTS " if if_exists else ""
        return f"DROP TABLE {exists_sql}{self.quote_identifier(table_name)}"

    def add_column_sql(
        self, table_name: str, name: str, attribute: AttributeDefinition
    ) -> str:
        """Generate ALTER TABLE ADD COLUMN SQL."""
        column = self.column_sql(name, attribute, inline_primary_key=False)
        return f"ALTER TABLE {self.quote_identifier(table_name)} ADD COLUMN {column}"

    def drop_column_sql(self, table_name: str, name: str) -> str:
        """Generate ALTER TABLE DROP COLUMN SQL."""
        return (
            f"ALTER TABLE {self.quote_identifier(table_name)} "
            f"DROP COLUMN {self.quote_identifier(name)}"
        )
