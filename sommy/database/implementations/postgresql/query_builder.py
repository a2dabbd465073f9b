"""PostgreSQL query builder implementation."""

from sommy.database.interfaces.query_builder import QueryBuilder
from sommy.database.utils import DOUBLE_QUOTE, quote_identifier
from sommy.types import Dialect


class PostgreSQLQueryBuilder(QueryBuilder):
    """PostgreSQL-specific query builder."""

    dialect = Dialect.PGSQL
    supports_returning = True

    def quote_identifier(self, name: str) -> str:
        return quote_identifier(name, DOUBLE_QUOTE)
