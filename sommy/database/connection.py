"""Connection provider owning one live database connection."""

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from types import TracebackType
from typing import Any, TypeVar

from pydantic import ValidationError
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import URL, Connection, CursorResult, Engine
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from sommy.config import SQLITE_MEMORY, ConnectionConfig
from sommy.database.utils import render_string_literal
from sommy.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    ExecutionError,
)
from sommy.log import get_logger, get_sql_logger
from sommy.types import DatabaseParamType, Dialect, RowType

logger = get_logger(__name__)
sql_logger = get_sql_logger()

T = TypeVar("T")

DRIVER_NAMES = {
    Dialect.MYSQL: "mysql+pymysql",
    Dialect.MARIADB: "mariadb+pymysql",
    Dialect.PGSQL: "postgresql+psycopg2",
    Dialect.SQLITE: "sqlite",
}


def build_database_url(config: ConnectionConfig) -> URL:
    """Construct the SQLAlchemy URL for a connection configuration.

    Args:
        config: Connection configuration

    Returns:
        Database connection URL
    """
    if config.dialect == Dialect.SQLITE:
        return URL.create(DRIVER_NAMES[Dialect.SQLITE], database=config.sqlite_path)

    query: dict[str, str] = {}
    if config.charset:
        key = "client_encoding" if config.dialect == Dialect.PGSQL else "charset"
        query[key] = config.charset

    return URL.create(
        DRIVER_NAMES[config.dialect],
        username=config.username,
        password=config.password,
        host=config.host,
        port=config.port,
        database=config.database,
        query=query,
    )


def _coerce_config(config: ConnectionConfig | Mapping[str, Any]) -> ConnectionConfig:
    if isinstance(config, ConnectionConfig):
        return config
    try:
        return ConnectionConfig.from_mapping(config)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid connection configuration: {e}") from e


class ConnectionProvider:
    """Owns a single database connection and its dialect identity.

    Statements issued outside an explicit ``begin()`` are committed as soon
    as they complete. Not safe for concurrent use.
    """

    def __init__(self, config: ConnectionConfig | Mapping[str, Any]) -> None:
        """Connect to the configured database.

        Args:
            config: Connection configuration or a plain mapping of options

        Raises:
            ConfigurationError: If the dialect or options are invalid
            DatabaseConnectionError: If the driver fails to connect
        """
        self.config = _coerce_config(config)
        self.dialect: Dialect = self.config.dialect
        self._transaction: Any = None
        self._engine = self._create_engine()

        try:
            self._connection: Connection = self._engine.connect()
        except SQLAlchemyError as e:
            logger.error(f"Failed to connect to {self.dialect.value} database: {e}")
            self._engine.dispose()
            raise DatabaseConnectionError(
                f"Failed to connect to {self.dialect.value} database: {e}"
            ) from e

        logger.info(f"Connected to {self.dialect.value}: {self._safe_url()}")

    def _create_engine(self) -> Engine:
        url = build_database_url(self.config)
        connect_args: dict[str, Any] = {}

        if self.dialect == Dialect.SQLITE:
            connect_args["timeout"] = 60.0
            if self.config.sqlite_path != SQLITE_MEMORY:
                Path(self.config.sqlite_path).parent.mkdir(parents=True, exist_ok=True)

        try:
            return create_engine(url, echo=self.config.echo, connect_args=connect_args)
        except ImportError as e:
            raise ConfigurationError(
                f"Database driver for {self.dialect.value} is not installed: {e}"
            ) from e

    def _safe_url(self) -> str:
        return build_database_url(self.config).render_as_string(hide_password=True)

    @property
    def connection(self) -> Connection:
        """Native SQLAlchemy connection handle."""
        return self._connection

    @property
    def engine(self) -> Engine:
        """SQLAlchemy engine backing the connection."""
        return self._engine

    @property
    def in_transaction(self) -> bool:
        """Check if an explicit transaction is open."""
        return self._transaction is not None and self._transaction.is_active

    def begin(self) -> None:
        """Begin an explicit transaction."""
        try:
            if self._transaction is None and self._connection.in_transaction():
                self._connection.commit()
            self._transaction = self._connection.begin()
        except SQLAlchemyError as e:
            raise ExecutionError(f"Failed to begin transaction: {e}") from e
        logger.debug("Transaction started")

    def commit(self) -> None:
        """Commit the explicit transaction, if any."""
        transaction, self._transaction = self._transaction, None
        try:
            if transaction is not None:
                transaction.commit()
            else:
                self._connection.commit()
        except SQLAlchemyError as e:
            raise ExecutionError(f"Failed to commit transaction: {e}") from e
        logger.debug("Transaction committed")

    def rollback(self) -> None:
        """Roll back the explicit transaction, if any."""
        transaction, self._transaction = self._transaction, None
        try:
            if transaction is not None:
                transaction.rollback()
            else:
                self._connection.rollback()
        except SQLAlchemyError as e:
            raise ExecutionError(f"Failed to roll back transaction: {e}") from e
        logger.debug("Transaction rolled back")

    @contextmanager
    def transaction(self) -> Iterator["ConnectionProvider"]:
        """Run a block in a transaction, committing on success."""
        self.begin()
        try:
            yield self
        except BaseException:
            self.rollback()
            raise
        self.commit()

    def quote_literal(self, value: str) -> str:
        """Quote a string as an SQL literal using the driver dialect's escaping."""
        return render_string_literal(value, self._engine.dialect)

    def _run(self, sql: str, operation: Callable[[Connection], T]) -> T:
        sql_logger.debug(sql)
        try:
            value = operation(self._connection)
            if not self.in_transaction:
                self._connection.commit()
            return value
        except SQLAlchemyError as e:
            logger.error(f"Statement failed: {e}")
            if not self.in_transaction:
                self._connection.rollback()
            raise ExecutionError(f"Failed to execute statement: {e}") from e

    def execute(self, sql: str, params: DatabaseParamType | None = None) -> int:
        """Execute a parameterized statement.

        Args:
            sql: SQL statement with ``:name`` placeholders
            params: Bound parameters

        Returns:
            Number of affected rows
        """
        return self._run(
            sql, lambda conn: conn.execute(text(sql), params or {}).rowcount
        )

    def execute_ddl(self, sql: str) -> None:
        """Execute a DDL statement verbatim, without parameter parsing."""

        def run(conn: Connection) -> None:
            # pyformat drivers would otherwise %-format the statement
            conn.exec_driver_sql(sql, execution_options={"no_parameters": True})

        self._run(sql, run)

    def fetch_all(
        self, sql: str, params: DatabaseParamType | None = None
    ) -> list[RowType]:
        """Fetch all rows.

        Args:
            sql: SQL query
            params: Bound parameters

        Returns:
            List of rows as dictionaries
        """

        def fetch(conn: Connection) -> list[RowType]:
            result = conn.execute(text(sql), params or {})
            return [dict(row._mapping) for row in result]

        return self._run(sql, fetch)

    def fetch_scalar(self, sql: str, params: DatabaseParamType | None = None) -> Any:
        """Fetch the first column of the first row."""
        return self._run(
            sql, lambda conn: conn.execute(text(sql), params or {}).scalar()
        )

    def insert(self, sql: str, params: DatabaseParamType | None = None) -> str | None:
        """Execute an INSERT and return the generated key.

        Args:
            sql: INSERT statement, optionally with a RETURNING clause
            params: Bound parameters

        Returns:
            Generated primary key as a string, or None if none was produced
        """
        return self._run(
            sql,
            lambda conn: self.last_insert_id(conn.execute(text(sql), params or {})),
        )

    def last_insert_id(self, result: CursorResult[Any]) -> str | None:
        """Read the key generated by an INSERT result.

        PostgreSQL reads the RETURNING row when present, else ``LASTVAL()``;
        the other dialects use the cursor's last row id.
        """
        if result.returns_rows:
            value = result.scalar()
        elif self.dialect == Dialect.PGSQL:
            value = self._lastval()
        else:
            value = result.lastrowid or None

        return None if value is None else str(value)

    def _lastval(self) -> Any:
        # LASTVAL() fails when no sequence was used; keep the outer transaction
        savepoint = self._connection.begin_nested()
        try:
            value = self._connection.exec_driver_sql("SELECT LASTVAL()").scalar()
        except DBAPIError as e:
            savepoint.rollback()
            logger.debug(f"No generated key available: {e}")
            return None
        savepoint.commit()
        return value

    def has_table(self, table_name: str) -> bool:
        """Check if a table exists."""
        return self._run(
            f"-- has_table {table_name}",
            lambda conn: inspect(conn).has_table(table_name),
        )

    def ping(self) -> bool:
        """Check that the connection is alive."""
        try:
            self.fetch_scalar("SELECT 1")
        except ExecutionError as e:
            logger.warning(f"Ping failed: {e}")
            return False
        return True

    def close(self) -> None:
        """Close the connection and dispose of the engine."""
        if self._transaction is not None and self._transaction.is_active:
            self._transaction.rollback()
        self._transaction = None
        self._connection.close()
        self._engine.dispose()
        logger.info(f"Disconnected from {self.dialect.value}")

    def __enter__(self) -> "ConnectionProvider":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
