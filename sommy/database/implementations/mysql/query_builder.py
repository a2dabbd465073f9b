"""MySQL and MariaDB query builder implementation."""

from sommy.database.interfaces.query_builder import QueryBuilder
from sommy.database.utils import BACKTICK, quote_identifier
from sommy.types import Dialect


class MySQLQueryBuilder(QueryBuilder):
    """MySQL-specific query builder, shared with MariaDB."""

    dialect = Dialect.MYSQL
    # Largest BIGINT UNSIGNED, the documented way to skip rows without a limit
    unbounded_limit = "18446744073709551615"

    def quote_identifier(self, name: str) -> str:
        return quote_identifier(name, BACKTICK)


class MariaDBQueryBuilder(MySQLQueryBuilder):
    """MariaDB query builder."""

    dialect = Dialect.MARIADB
