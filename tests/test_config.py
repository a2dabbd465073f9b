"""Tests for configuration management."""

import os
from unittest.mock import patch

import pytest

from sommy.config import ConnectionConfig, Settings, load_settings
from sommy.exceptions import ConfigurationError
from sommy.types import Dialect, Environment


def test_environment_values() -> None:
    """Test environment enum values."""
    assert Environment.DEVELOPMENT == "development"
    assert Environment.PRODUCTION == "production"
    assert Environment.TESTING == "testing"


def test_default_settings() -> None:
    """Test default settings values."""
    settings = Settings()

    assert settings.environment == Environment.DEVELOPMENT
    assert settings.log_level == "INFO"
    assert settings.dialect == "sqlite"
    assert settings.path is None
    assert settings.echo_sql is False
    assert settings.is_development is True


def test_testing_settings_use_memory_database() -> None:
    """Test the testing environment defaults to in-memory SQLite."""
    settings = Settings(environment=Environment.TESTING)

    assert settings.is_testing is True
    assert settings.path == ":memory:"


def test_load_settings_from_environment() -> None:
    """Test settings are read from SOMMY_* variables."""
    env_vars = {
        "SOMMY_ENV": "production",
        "SOMMY_LOG_LEVEL": "debug",
        "SOMMY_DB_DIALECT": "pgsql",
        "SOMMY_DB_HOST": "db.internal",
        "SOMMY_DB_PORT": "5433",
        "SOMMY_DB_NAME": "app",
        "SOMMY_DB_USER": "sommy",
        "SOMMY_DB_PASSWORD": "secret",
        "SOMMY_DB_ECHO": "yes",
    }

    with patch.dict(os.environ, env_vars, clear=True):
        settings = load_settings()

    assert settings.is_production is True
    assert settings.log_level == "DEBUG"
    assert settings.port == 5433
    assert settings.echo_sql is True

    config = settings.to_connection_config()
    assert config.dialect == Dialect.PGSQL
    assert config.host == "db.internal"
    assert config.database == "app"
    assert config.username == "sommy"
    assert config.charset is None
    assert config.echo is False


def test_load_settings_defaults() -> None:
    """Test load_settings without any variables set."""
    with patch.dict(os.environ, {}, clear=True):
        settings = load_settings()

    assert settings.environment == Environment.DEVELOPMENT
    assert settings.port is None
    assert settings.to_connection_config().dialect == Dialect.SQLITE


def test_connection_config_mysql_charset_default() -> None:
    """Test MySQL family dialects default to utf8mb4."""
    assert ConnectionConfig(dialect="mysql").charset == "utf8mb4"
    assert ConnectionConfig(dialect="mariadb").charset == "utf8mb4"
    assert ConnectionConfig(dialect="mysql", charset="latin1").charset == "latin1"
    assert ConnectionConfig(dialect="pgsql").charset is None


def test_connection_config_aliases() -> None:
    """Test dbname, storage and user aliases."""
    config = ConnectionConfig.from_mapping(
        {"dialect": "PostgreSQL", "dbname": "app", "user": "me", "extra": 1}
    )
    assert config.dialect == Dialect.PGSQL
    assert config.database == "app"
    assert config.username == "me"

    sqlite_config = ConnectionConfig.from_mapping(
        {"dialect": "sqlite", "storage": "/tmp/app.db"}
    )
    assert sqlite_config.sqlite_path == "/tmp/app.db"


def test_connection_config_sqlite_path_fallback() -> None:
    """Test SQLite path falls back to the database name, then memory."""
    assert ConnectionConfig(dialect="sqlite").sqlite_path == ":memory:"
    assert ConnectionConfig(dialect="sqlite", database="x.db").sqlite_path == "x.db"
    assert (
        ConnectionConfig(dialect="sqlite", database="x.db", path="y.db").sqlite_path
        == "y.db"
    )


def test_connection_config_unsupported_dialect() -> None:
    """Test unsupported dialects are configuration errors."""
    with pytest.raises(ConfigurationError, match="Unsupported dialect"):
        ConnectionConfig.from_mapping({"dialect": "oracle"})


def test_dialect_parse() -> None:
    """Test dialect names and aliases."""
    assert Dialect.parse("MySQL") == Dialect.MYSQL
    assert Dialect.parse("postgres") == Dialect.PGSQL
    assert Dialect.parse("sqlite3") == Dialect.SQLITE
    assert Dialect.parse(Dialect.MARIADB) == Dialect.MARIADB
    assert Dialect.MARIADB.is_mysql_family is True
    assert Dialect.PGSQL.is_mysql_family is False

    with pytest.raises(ConfigurationError):
        Dialect.parse("mssql")
