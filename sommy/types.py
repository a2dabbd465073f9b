"""Common type definitions for the sommy ORM."""

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, TypeAlias

from sommy.exceptions import ConfigurationError

DatabaseParamType: TypeAlias = dict[str, Any]
RowType: TypeAlias = dict[str, Any]
Scalar: TypeAlias = str | int | float | bool | bytes | None
PredicateType: TypeAlias = Mapping[str, Scalar | Sequence[Scalar]]


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Dialect(str, Enum):
    """Supported SQL dialects."""

    MYSQL = "mysql"
    MARIADB = "mariadb"
    PGSQL = "pgsql"
    SQLITE = "sqlite"

    @classmethod
    def parse(cls, value: "str | Dialect") -> "Dialect":
        """Parse a dialect name.

        Args:
            value: Dialect name, case-insensitive

        Returns:
            Matching dialect

        Raises:
            ConfigurationError: If the dialect is not supported
        """
        if isinstance(value, Dialect):
            return value

        name = str(value).strip().lower()
        name = _DIALECT_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError as e:
            raise ConfigurationError(f"Unsupported dialect: {value!r}") from e

    @property
    def is_mysql_family(self) -> bool:
        """Check if the dialect speaks the MySQL syntax."""
        return self in (Dialect.MYSQL, Dialect.MARIADB)


_DIALECT_ALIASES = {
    "postgres": "pgsql",
    "postgresql": "pgsql",
    "sqlite3": "sqlite",
}


class TypeTag(str, Enum):
    """Logical column types."""

    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    SMALLINT = "SMALLINT"
    VARCHAR = "VARCHAR"
    TEXT = "TEXT"
    BOOLEAN = "BOOLEAN"
    DATE = "DATE"
    DATETIME = "DATETIME"
    TIME = "TIME"
    TIMESTAMP = "TIMESTAMP"
    FLOAT = "FLOAT"
    DECIMAL = "DECIMAL"
    JSON = "JSON"
    UUID = "UUID"

    @classmethod
    def parse(cls, value: "str | TypeTag") -> "TypeTag":
        """Parse a type name, accepting the INT and STRING aliases."""
        if isinstance(value, TypeTag):
            return value

        name = str(value).strip().upper()
        name = _TYPE_ALIASES.get(name, name)
        return cls(name)

    @property
    def is_integer(self) -> bool:
        """Check if the type holds integers."""
        return self in (TypeTag.INTEGER, TypeTag.BIGINT, TypeTag.SMALLINT)


_TYPE_ALIASES = {
    "INT": "INTEGER",
    "STRING": "VARCHAR",
}
