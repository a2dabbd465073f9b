"""Entity facade binding a schema to CRUD operations."""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from sommy.database.interfaces.query_builder import OrderType
from sommy.database.query_interface import QueryInterface
from sommy.database.utils import referenced_columns
from sommy.exceptions import MissingPrimaryKeyError, UnknownColumnError
from sommy.log import get_logger
from sommy.schema import AttributeSpec, SchemaDescriptor
from sommy.types import PredicateType, RowType

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class EntityConfig:
    """Immutable binding of one declared entity to its table and schema."""

    name: str
    table_name: str
    schema: SchemaDescriptor
    query: QueryInterface

    @property
    def primary_key(self) -> str:
        return self.schema.primary_key

    @classmethod
    def build(
        cls,
        query: QueryInterface,
        name: str,
        attributes: Mapping[str, AttributeSpec],
        options: Mapping[str, Any] | None = None,
    ) -> "EntityConfig":
        """Bind an entity declaration.

        Args:
            query: Query interface used for every operation
            name: Entity name
            attributes: Ordered column definitions
            options: ``tableName`` (defaults to the lowercased entity name)
                and ``primaryKey`` (overrides detection); snake_case
                spellings are accepted too

        Returns:
            Entity configuration
        """
        options = options or {}
        table_name = options.get("tableName") or options.get("table_name")
        primary_key = options.get("primaryKey") or options.get("primary_key")
        return cls(
            name=name,
            table_name=table_name or name.lower(),
            schema=SchemaDescriptor(attributes, primary_key=primary_key),
            query=query,
        )

    def check_columns(self, keys: Iterable[str]) -> None:
        """Raise UnknownColumnError for keys that are not schema columns."""
        for key in keys:
            if not self.schema.has_column(key):
                raise UnknownColumnError(
                    f"Unknown column {key!r} for entity {self.name}"
                )

    def coerce_key(self, key: str) -> Any:
        """Convert a generated key string to the primary key column's type."""
        attribute = self.schema.get(self.primary_key)
        if attribute is not None and attribute.type.is_integer:
            return int(key)
        return key


class Entity:
    """One mutable row of a declared entity.

    Columns are readable as items or attributes. Through get() and item
    access unknown keys read as None.
    Assigning a key that is not a schema column raises UnknownColumnError.
    Columns whose names clash with methods are only reachable as items.
    """

    def __init__(
        self, config: EntityConfig, values: Mapping[str, Any] | None = None
    ) -> None:
        object.__setattr__(self, "_config", config)
        object.__setattr__(self, "_data", {})
        for key, value in (values or {}).items():
            self.set(key, value)

    @classmethod
    def from_row(cls, config: EntityConfig, row: RowType) -> "Entity":
        """Wrap a fetched row, keeping every returned field."""
        entity = cls(config)
        entity._data.update(row)
        return entity

    @property
    def config(self) -> EntityConfig:
        return self._config

    @property
    def primary_key_value(self) -> Any:
        return self._data.get(self._config.primary_key)

    @property
    def is_new(self) -> bool:
        """Check if the record has no primary key value yet."""
        return self.primary_key_value is None

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        # Only bare column names are persisted by save()
        if key not in self._config.schema:
            raise UnknownColumnError(
                f"Unknown column {key!r} for entity {self._config.name}"
            )
        self._data[key] = value

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def __getitem__(self, key: str) -> Any:
        return self._data.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._data or self._config.schema.has_column(name):
            return self._data.get(name)
        raise AttributeError(
            f"{self._config.name!r} entity has no column {name!r}"
        )

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def __repr__(self) -> str:
        return f"<{self._config.name} {self._data!r}>"

    def _column_values(self) -> dict[str, Any]:
        schema = self._config.schema
        return {key: value for key, value in self._data.items() if key in schema}

    def save(self) -> bool:
        """Persist the record.

        Records with a primary key value are updated, keyed on that value;
        records without one are inserted and receive the generated key.

        Returns:
            True if a row was updated, or a key was produced by the insert
        """
        config = self._config
        if self.is_new:
            return self._insert()

        values = self._column_values()
        values.pop(config.primary_key, None)
        affected = config.query.update(
            config.table_name, values, {config.primary_key: self.primary_key_value}
        )
        return affected >= 1

    def _insert(self) -> bool:
        config = self._config
        declared = config.primary_key in config.schema
        explicit_key = not self.is_new
        key = config.query.insert(
            config.table_name,
            self._column_values(),
            returning=config.primary_key if declared else None,
        )
        if key is None:
            # Explicit keys are not reported back by every driver
            return explicit_key

        if declared and not explicit_key:
            self._data[config.primary_key] = config.coerce_key(key)
        return True

    def delete(self) -> int:
        """Delete the row identified by this record's primary key.

        In-memory fields are left untouched.

        Returns:
            Number of deleted rows; 0 without executing when the key is absent
        """
        if self.is_new:
            logger.debug(f"Skipping delete of unsaved {self._config.name}")
            return 0

        config = self._config
        return config.query.delete(
            config.table_name, {config.primary_key: self.primary_key_value}
        )

    def reload(self) -> bool:
        """Refresh fields from the database; False if the row is gone."""
        if self.is_new:
            return False

        config = self._config
        rows = config.query.select(
            config.table_name,
            where={config.primary_key: self.primary_key_value},
            limit=1,
        )
        if not rows:
            return False

        self._data.clear()
        self._data.update(rows[0])
        return True


class Model:
    """CRUD facade over one declared entity."""

    def __init__(self, config: EntityConfig) -> None:
        self.config = config

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def table_name(self) -> str:
        return self.config.table_name

    @property
    def schema(self) -> SchemaDescriptor:
        return self.config.schema

    @property
    def attributes(self) -> SchemaDescriptor:
        return self.config.schema

    @property
    def primary_key(self) -> str:
        return self.config.primary_key

    @property
    def query(self) -> QueryInterface:
        return self.config.query

    def __repr__(self) -> str:
        return f"Model({self.name!r}, table={self.table_name!r})"

    def build(self, values: Mapping[str, Any] | None = None) -> Entity:
        """Create an unsaved record."""
        return Entity(self.config, values)

    def create(self, values: Mapping[str, Any]) -> Entity | None:
        """Insert a record.

        Args:
            values: Column to value mapping; may carry an explicit key

        Returns:
            The persisted record, or None when nothing was inserted
        """
        entity = self.build(values)
        if not entity._insert():
            return None
        return entity

    def find_all(
        self,
        where: PredicateType | None = None,
        *,
        columns: Sequence[str] | str | None = None,
        order: OrderType = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Entity]:
        """Find records matching a predicate.

        Args:
            where: Predicate mapping over schema columns
            columns: Column specs to select (None for all); plain column
                names must be schema columns
            order: Raw ORDER BY text or a schema column to direction mapping
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            Matching records
        """
        self.config.check_columns(where or {})
        self.config.check_columns(referenced_columns(columns))
        if isinstance(order, Mapping):
            self.config.check_columns(order)
        rows = self.query.select(
            self.table_name,
            columns,
            where,
            order=order,
            limit=limit,
            offset=offset,
        )
        return [Entity.from_row(self.config, row) for row in rows]

    def find_one(
        self, where: PredicateType | None = None, **options: Any
    ) -> Entity | None:
        """Find the first record matching a predicate."""
        options["limit"] = 1
        records = self.find_all(where, **options)
        return records[0] if records else None

    def find_by_pk(self, value: Any) -> Entity | None:
        """Find a record by primary key value."""
        if value is None:
            raise MissingPrimaryKeyError(
                f"No primary key value given for {self.name}"
            )
        return self.find_one({self.primary_key: value})

    def update(self, values: Mapping[str, Any], where: PredicateType | None) -> int:
        """Update matching rows and return the number affected."""
        self.config.check_columns(values)
        self.config.check_columns(where or {})
        return self.query.update(self.table_name, values, where)

    def destroy(self, where: PredicateType | None = None) -> int:
        """Delete matching rows and return the number affected."""
        self.config.check_columns(where or {})
        return self.query.delete(self.table_name, where)

    def count(self, where: PredicateType | None = None) -> int:
        """Count matching rows."""
        self.config.check_columns(where or {})
        return self.query.count(self.table_name, where)

    def sync(self, *, force: bool = False) -> bool:
        """Create the table; ``force`` drops an existing one first."""
        if force:
            self.drop()
        return self.query.create_table(
            self.table_name, self.schema, if_not_exists=True
        )

    def drop(self) -> bool:
        """Drop the table if it exists."""
        return self.query.drop_table(self.table_name, if_exists=True)
