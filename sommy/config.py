"""Configuration management for the sommy ORM."""

import os
from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .types import Dialect, Environment

MYSQL_DEFAULT_CHARSET = "utf8mb4"
SQLITE_MEMORY = ":memory:"


class ConnectionConfig(BaseModel):
    """Connection configuration record for a ConnectionProvider."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    dialect: Dialect = Field(description="Target SQL dialect")
    host: str | None = Field(default=None, description="Database server host")
    port: int | None = Field(default=None, description="Database server port")
    database: str | None = Field(default=None, description="Database name")
    username: str | None = Field(default=None, description="Login user")
    password: str | None = Field(default=None, description="Login password")
    charset: str | None = Field(default=None, description="Connection charset")
    path: str | None = Field(default=None, description="SQLite database file")
    echo: bool = Field(default=False, description="Echo SQL through SQLAlchemy")

    @model_validator(mode="before")
    @classmethod
    def _apply_aliases(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data

        values = dict(data)
        if values.get("database") is None and values.get("dbname") is not None:
            values["database"] = values["dbname"]
        if values.get("path") is None and values.get("storage") is not None:
            values["path"] = values["storage"]
        if values.get("username") is None and values.get("user") is not None:
            values["username"] = values["user"]
        if values.get("charset") is None and values.get("dialect") is not None:
            if Dialect.parse(values["dialect"]).is_mysql_family:
                values["charset"] = MYSQL_DEFAULT_CHARSET
        return values

    @field_validator("dialect", mode="before")
    @classmethod
    def _parse_dialect(cls, value: Any) -> Dialect:
        return Dialect.parse(value)

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "ConnectionConfig":
        """Build a configuration from a plain mapping."""
        return cls.model_validate(dict(config))

    @property
    def sqlite_path(self) -> str:
        """SQLite database location: path, else database name, else memory."""
        return self.path or self.database or SQLITE_MEMORY


class Settings(BaseModel):
    """Application settings."""

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production/testing)",
    )
    log_level: str = Field(default="INFO", description="Logging level")

    # Database
    dialect: str = Field(default="sqlite", description="Database dialect")
    host: str | None = Field(default=None, description="Database host")
    port: int | None = Field(default=None, description="Database port")
    database: str | None = Field(default=None, description="Database name")
    username: str | None = Field(default=None, description="Database user")
    password: str | None = Field(default=None, description="Database password")
    charset: str | None = Field(default=None, description="Connection charset")
    path: str | None = Field(default=None, description="SQLite database file")
    echo_sql: bool = Field(
        default=False, description="Log every statement on the sommy.sql logger"
    )

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        # Tests never touch a file database unless asked to
        if self.environment == Environment.TESTING and self.path is None:
            self.path = SQLITE_MEMORY

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == Environment.TESTING

    def to_connection_config(self) -> ConnectionConfig:
        """Build the connection configuration described by these settings."""
        return ConnectionConfig(
            dialect=self.dialect,
            host=self.host,
            port=self.port,
            database=self.database,
            username=self.username,
            password=self.password,
            charset=self.charset,
            path=self.path,
        )


def _optional_int(value: str | None) -> int | None:
    return int(value) if value else None


def load_settings() -> Settings:
    """Load settings from environment variables."""

    # Load .env file if it exists
    load_dotenv()

    echo_sql = os.getenv("SOMMY_DB_ECHO", "false").lower() in ["true", "1", "yes", "on"]

    return Settings(
        environment=Environment(os.getenv("SOMMY_ENV", "development")),
        log_level=os.getenv("SOMMY_LOG_LEVEL", "INFO").upper(),
        dialect=os.getenv("SOMMY_DB_DIALECT", "sqlite"),
        host=os.getenv("SOMMY_DB_HOST"),
        port=_optional_int(os.getenv("SOMMY_DB_PORT")),
        database=os.getenv("SOMMY_DB_NAME"),
        username=os.getenv("SOMMY_DB_USER"),
        password=os.getenv("SOMMY_DB_PASSWORD"),
        charset=os.getenv("SOMMY_DB_CHARSET"),
        path=os.getenv("SOMMY_DB_PATH"),
        echo_sql=echo_sql,
    )
