"""SQLite query builder implementation."""

from sommy.database.interfaces.query_builder import QueryBuilder
from sommy.database.utils import DOUBLE_QUOTE, quote_identifier
from sommy.types import Dialect


class SQLiteQueryBuilder(QueryBuilder):
    """SQLite-specific query builder."""

    dialect = Dialect.SQLITE
    unbounded_limit = "-1"

    def quote_identifier(self, name: str) -> str:
        return quote_identifier(name, DOUBLE_QUOTE)
