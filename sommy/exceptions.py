"""Exceptions for the sommy ORM."""


class SommyError(Exception):
    """Base exception for sommy errors."""

    pass


class ConfigurationError(SommyError):
    """Raised when the connection configuration is invalid."""

    pass


class DatabaseConnectionError(SommyError):
    """Raised when the database driver fails to connect."""

    pass


class ExecutionError(SommyError):
    """Raised when a statement fails while executing on the database."""

    pass


class StatementBuildError(SommyError):
    """Raised when a statement can not be built from the given input."""

    pass


class UnknownColumnError(SommyError, KeyError):
    """Raised when a key does not name a column of the entity schema."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class MissingPrimaryKeyError(SommyError):
    """Raised when an operation needs a primary key value that is absent."""

    pass
