"""Abstract query builder for the supported SQL dialects."""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from sommy.database.utils import (
    build_column_list,
    build_limit_clause,
    build_order_by_clause,
    build_where_clause,
    sanitize_param_name,
    unique_param_name,
)
from sommy.exceptions import StatementBuildError
from sommy.types import DatabaseParamType, Dialect, PredicateType

OrderType = str | Mapping[str, Any] | Sequence[str] | None


class QueryBuilder(ABC):
    """Builds parameterized DML statements for one SQL dialect."""

    dialect: Dialect
    # LIMIT value meaning "no limit", for an OFFSET without LIMIT
    unbounded_limit: str | None = None
    supports_returning = False

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Quote a table or column identifier."""
        pass

    def select(
        self,
        table: str,
        columns: Sequence[str] | str | None = None,
        where: PredicateType | None = None,
        order: OrderType = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[str, DatabaseParamType]:
        """Build SELECT query.

        Args:
            table: Table name
            columns: Column specs to select (None for all)
            where: Predicate mapping
            order: Raw ORDER BY text or a column to direction mapping
            limit: LIMIT value
            offset: OFFSET value

        Returns:
            Tuple of (query, parameters)
        """
        cols = build_column_list(columns, self.quote_identifier)
        query = f"SELECT {cols} FROM {self.quote_identifier(table)}"

        where_clause, params = build_where_clause(where, self.quote_identifier)
        if where_clause:
            query += f" {where_clause}"

        order_clause = build_order_by_clause(order, self.quote_identifier)
        if order_clause:
            query += f" {order_clause}"

        limit_clause = build_limit_clause(limit, offset, self.unbounded_limit)
        if limit_clause:
            query += f" {limit_clause}"

        return query, params

    def insert(
        self, table: str, data: Mapping[str, Any], returning: str | None = None
    ) -> tuple[str, DatabaseParamType]:
        """Build INSERT query.

        Args:
            table: Table name
            data: Column to value mapping to insert
            returning: Column whose generated value the statement should
                return, on dialects with ``RETURNING`` support

        Returns:
            Tuple of (query, parameters)
        """
        if not data:
            raise StatementBuildError("Cannot insert empty data")

        columns, placeholders, params = self._bind_values(data)
        query = (
            f"INSERT INTO {self.quote_identifier(table)} "
            f"({', '.join(columns)}) VALUES ({', '.join(placeholders)})"
        )

        if returning and self.supports_returning:
            query += f" RETURNING {self.quote_identifier(returning)}"

        return query, params

    def update(
        self,
        table: str,
        data: Mapping[str, Any],
        where: PredicateType | None = None,
    ) -> tuple[str, DatabaseParamType]:
        """Build UPDATE query.

        Args:
            table: Table name
            data: Column to value mapping to set
            where: Predicate mapping

        Returns:
            Tuple of (query, parameters)
        """
        if not data:
            raise StatementBuildError("Cannot update with empty data")

        columns, placeholders, params = self._bind_values(data)
        set_clause = ", ".join(
            f"{column} = {placeholder}"
            for column, placeholder in zip(columns, placeholders, strict=True)
        )
        query = f"UPDATE {self.quote_identifier(table)} SET {set_clause}"

        where_clause, where_params = build_where_clause(
            where, self.quote_identifier, reserved=params
        )
        if where_clause:
            query += f" {where_clause}"
            params.update(where_params)

        return query, params

    def delete(
        self, table: str, where: PredicateType | None = None
    ) -> tuple[str, DatabaseParamType]:
        """Build DELETE query.

        Args:
            table: Table name
            where: Predicate mapping

        Returns:
            Tuple of (query, parameters)
        """
        query = f"DELETE FROM {self.quote_identifier(table)}"
        where_clause, params = build_where_clause(where, self.quote_identifier)
        if where_clause:
            query += f" {where_clause}"
        return query, params

    def count(
        self, table: str, where: PredicateType | None = None
    ) -> tuple[str, DatabaseParamType]:
        """Build COUNT query.

        Args:
            table: Table name
            where: Predicate mapping

        Returns:
            Tuple of (query, parameters)
        """
        query = f"SELECT COUNT(*) FROM {self.quote_identifier(table)}"
        where_clause, params = build_where_clause(where, self.quote_identifier)
        if where_clause:
            query += f" {where_clause}"
        return query, params

    def _bind_values(
        self, data: Mapping[str, Any]
    ) -> tuple[list[str], list[str], DatabaseParamType]:
        columns: list[str] = []
        placeholders: list[str] = []
        params: DatabaseParamType = {}
        for column, value in data.items():
            name = unique_param_name(sanitize_param_name(column), params)
            params[name] = value
            columns.append(self.quote_identifier(column))
            placeholders.append(f":{name}")
        return columns, placeholders, params
