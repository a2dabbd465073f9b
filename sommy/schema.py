"""Entity schema descriptors."""

from collections.abc import Iterator, Mapping
from typing import Any

from sommy.data_types import AttributeDefinition

DEFAULT_PRIMARY_KEY = "id"

AttributeSpec = AttributeDefinition | Mapping[str, Any]


def resolve_primary_key(
    attributes: Mapping[str, AttributeDefinition], default: str | None = None
) -> str:
    """Resolve the primary key column of a set of attributes.

    Args:
        attributes: Ordered column definitions
        default: Configured fallback column name

    Returns:
        First column flagged as primary key, else ``default``, else ``"id"``
    """
    for name, attribute in attributes.items():
        if attribute.primary_key:
            return name
    return default or DEFAULT_PRIMARY_KEY


class SchemaDescriptor(Mapping[str, AttributeDefinition]):
    """Ordered column definitions of one entity plus its primary key."""

    def __init__(
        self,
        attributes: Mapping[str, AttributeSpec],
        primary_key: str | None = None,
    ) -> None:
        """Initialize the descriptor.

        Args:
            attributes: Ordered mapping of column name to definition, either
                ``AttributeDefinition`` instances or plain mappings
            primary_key: Explicit primary key column, overriding detection
        """
        self._attributes: dict[str, AttributeDefinition] = {
            name: _coerce(spec) for name, spec in attributes.items()
        }
        self.primary_key = primary_key or resolve_primary_key(self._attributes)

    def __getitem__(self, name: str) -> AttributeDefinition:
        return self._attributes[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __repr__(self) -> str:
        columns = ", ".join(self._attributes)
        return f"SchemaDescriptor({columns}; primary_key={self.primary_key})"

    @property
    def columns(self) -> list[str]:
        """Column names in declaration order."""
        return list(self._attributes)

    @property
    def primary_key_columns(self) -> list[str]:
        """Columns flagged as primary key, in declaration order."""
        return [name for name, attr in self._attributes.items() if attr.primary_key]

    def has_column(self, name: str) -> bool:
        """Check a bare or table-qualified column name against the schema."""
        return name in self._attributes or name.rsplit(".", 1)[-1] in self._attributes


def _coerce(spec: AttributeSpec) -> AttributeDefinition:
    if isinstance(spec, AttributeDefinition):
        return spec
    return AttributeDefinition.from_mapping(spec)
