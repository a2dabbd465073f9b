"""Sommy: a lightweight ORM for MySQL/MariaDB, PostgreSQL and SQLite."""

from .config import ConnectionConfig, Settings, load_settings
from .data_types import AttributeDefinition, DataTypes
from .exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    ExecutionError,
    MissingPrimaryKeyError,
    SommyError,
    StatementBuildError,
    UnknownColumnError,
)
from .log import (
    configure_logging,
    get_logger,
    setup_logging,
    setup_production_logging,
    setup_test_logging,
)
from .schema import SchemaDescriptor
from .types import Dialect, Environment, TypeTag
from .database import ConnectionProvider, QueryInterface
from .models import Entity, EntityConfig, Model
from .manager import SommyManager

__all__ = [
    "AttributeDefinition",
    "ConfigurationError",
    "ConnectionConfig",
    "ConnectionProvider",
    "DataTypes",
    "DatabaseConnectionError",
    "Dialect",
    "Entity",
    "EntityConfig",
    "Environment",
    "ExecutionError",
    "MissingPrimaryKeyError",
    "Model",
    "QueryInterface",
    "SchemaDescriptor",
    "Settings",
    "SommyError",
    "SommyManager",
    "StatementBuildError",
    "TypeTag",
    "UnknownColumnError",
    "configure_logging",
    "get_logger",
    "load_settings",
    "setup_logging",
    "setup_production_logging",
    "setup_test_logging",
]
