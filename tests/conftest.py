"""Global pytest configuration and fixtures."""

from collections.abc import Generator
from logging import Logger

import pytest

from sommy import DataTypes, SommyManager, setup_test_logging
from sommy.data_types import AttributeDefinition
from sommy.database import ConnectionProvider, QueryInterface
from sommy.models import Model


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Setup test logging for all tests."""
    setup_test_logging()


@pytest.fixture(scope="function")
def logger() -> Logger:
    """Provide a logger instance for tests."""
    from sommy import get_logger

    return get_logger("test")


@pytest.fixture
def user_attributes() -> dict[str, AttributeDefinition]:
    """Column definitions of the User entity."""
    return {
        "id": DataTypes.INTEGER(primary_key=True, auto_increment=True),
        "name": DataTypes.STRING(100),
        "email": DataTypes.STRING(150),
    }


@pytest.fixture
def provider() -> Generator[ConnectionProvider, None, None]:
    """Connection provider on an in-memory SQLite database."""
    provider = ConnectionProvider({"dialect": "sqlite"})
    yield provider
    provider.close()


@pytest.fixture
def query_interface(provider: ConnectionProvider) -> QueryInterface:
    """Query interface bound to the in-memory provider."""
    return QueryInterface(provider)


@pytest.fixture
def manager() -> Generator[SommyManager, None, None]:
    """ORM manager on an in-memory SQLite database."""
    with SommyManager({"dialect": "sqlite", "path": ":memory:"}) as manager:
        yield manager


@pytest.fixture
def user_model(
    manager: SommyManager, user_attributes: dict[str, AttributeDefinition]
) -> Model:
    """User model with its table created."""
    model = manager.define("User", user_attributes, {"tableName": "users"})
    model.sync()
    return model


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Reinstate test logging after a test reconfigures it."""
    yield
    setup_test_logging()
