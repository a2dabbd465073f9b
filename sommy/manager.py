"""ORM entry point tying a connection to declared entities."""

from collections.abc import Mapping
from types import TracebackType
from typing import Any

from sommy.config import ConnectionConfig, Settings
from sommy.database.connection import ConnectionProvider
from sommy.database.query_interface import QueryInterface
from sommy.log import configure_logging, get_logger
from sommy.models.entity import EntityConfig, Model
from sommy.schema import AttributeSpec

logger = get_logger(__name__)


class SommyManager:
    """Owns the connection provider and the models declared on it."""

    def __init__(self, config: ConnectionConfig | Mapping[str, Any]) -> None:
        """Connect and prepare the query interface.

        Args:
            config: Connection configuration or a plain mapping of options
        """
        self.provider = ConnectionProvider(config)
        self.query_interface = QueryInterface(self.provider)
        self.models: dict[str, Model] = {}

    @classmethod
    def from_settings(
        cls, settings: Settings, *, apply_logging: bool = True
    ) -> "SommyManager":
        """Create a manager from application settings.

        Args:
            settings: Application settings
            apply_logging: Whether to first configure logging from the
                environment, log level and SQL echo flag of the settings

        Returns:
            Connected manager
        """
        if apply_logging:
            configure_logging(settings)
        return cls(settings.to_connection_config())

    def authenticate(self) -> bool:
        """Check that the database answers."""
        return self.provider.ping()

    def get_query_interface(self) -> QueryInterface:
        return self.query_interface

    def define(
        self,
        name: str,
        attributes: Mapping[str, AttributeSpec],
        options: Mapping[str, Any] | None = None,
    ) -> Model:
        """Declare an entity.

        Args:
            name: Entity name
            attributes: Ordered column definitions
            options: ``tableName`` and ``primaryKey`` overrides

        Returns:
            Model bound to the declared entity
        """
        config = EntityConfig.build(self.query_interface, name, attributes, options)
        model = Model(config)
        if name in self.models:
            logger.warning(f"Redefining entity {name}")
        self.models[name] = model
        logger.debug(f"Defined entity {name} on table {config.table_name}")
        return model

    def sync(self, *, force: bool = False) -> None:
        """Create the tables of every defined model."""
        for model in self.models.values():
            model.sync(force=force)

    def close(self) -> None:
        self.provider.close()

    def __enter__(self) -> "SommyManager":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
