"""Column type catalog.

Each ``DataTypes`` constructor returns an immutable ``AttributeDefinition``.
Options are merged additively on top of the constructor's base fields; the
base ``type`` and any typed argument (``length``, ``precision``, ``scale``)
always win. Values are not range-checked here, and options that name no
field are kept in ``extra``.
"""

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sommy.types import Scalar, TypeTag

_OPTION_ALIASES = {
    "allowNull": "allow_null",
    "primaryKey": "primary_key",
    "autoIncrement": "auto_increment",
    "defaultValue": "default",
}


@dataclass(frozen=True)
class AttributeDefinition:
    """Normalized description of one column."""

    type: TypeTag
    length: int | None = None
    precision: int | None = None
    scale: int | None = None
    allow_null: bool = True
    unique: bool = False
    primary_key: bool = False
    auto_increment: bool = False
    default: Scalar = None
    has_default: bool = False
    # Options with no matching field, kept as given
    extra: Mapping[str, Any] = dataclasses.field(default_factory=dict, compare=False)

    def replace(self, **changes: Any) -> "AttributeDefinition":
        """Return a copy with the given fields changed."""
        if "default" in changes:
            changes.setdefault("has_default", True)
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AttributeDefinition":
        """Build a definition from a plain mapping.

        Args:
            data: Mapping with a ``type`` key and optional constraint keys,
                in snake_case or camelCase

        Returns:
            Attribute definition
        """
        options = _normalize_options(data)
        type_tag = TypeTag.parse(options.pop("type"))
        return _define(type_tag, {}, options)


_FIELD_NAMES = frozenset(
    field.name
    for field in dataclasses.fields(AttributeDefinition)
    if field.name != "extra"
)


def _normalize_options(options: Mapping[str, Any]) -> dict[str, Any]:
    return {_OPTION_ALIASES.get(key, key): value for key, value in options.items()}


def _define(
    type_tag: TypeTag, typed: dict[str, Any], options: Mapping[str, Any]
) -> AttributeDefinition:
    fields = _normalize_options(options)
    if "default" in fields:
        fields.setdefault("has_default", True)
    fields.update(typed)
    fields["type"] = type_tag
    extra = {key: fields.pop(key) for key in list(fields) if key not in _FIELD_NAMES}
    return AttributeDefinition(**fields, extra=extra)


class DataTypes:
    """Constructors for column definitions, one per logical type."""

    @staticmethod
    def INTEGER(**options: Any) -> AttributeDefinition:
        return _define(TypeTag.INTEGER, {}, options)

    @staticmethod
    def BIGINT(**options: Any) -> AttributeDefinition:
        return _define(TypeTag.BIGINT, {}, options)

    @staticmethod
    def SMALLINT(**options: Any) -> AttributeDefinition:
        return _define(TypeTag.SMALLINT, {}, options)

    @staticmethod
    def STRING(length: int = 255, **options: Any) -> AttributeDefinition:
        return _define(TypeTag.VARCHAR, {"length": length}, options)

    VARCHAR = STRING

    @staticmethod
    def TEXT(**options: Any) -> AttributeDefinition:
        return _define(TypeTag.TEXT, {}, options)

    @staticmethod
    def BOOLEAN(**options: Any) -> AttributeDefinition:
        return _define(TypeTag.BOOLEAN, {}, options)

    @staticmethod
    def DATE(**options: Any) -> AttributeDefinition:
        return _define(TypeTag.DATE, {}, options)

    @staticmethod
    def DATETIME(**options: Any) -> AttributeDefinition:
        return _define(TypeTag.DATETIME, {}, options)

    @staticmethod
    def TIME(**options: Any) -> AttributeDefinition:
        return _define(TypeTag.TIME, {}, options)

    @staticmethod
    def TIMESTAMP(**options: Any) -> AttributeDefinition:
        return _define(TypeTag.TIMESTAMP, {}, options)

    @staticmethod
    def FLOAT(**options: Any) -> AttributeDefinition:
        return _define(TypeTag.FLOAT, {}, options)

    @staticmethod
    def DECIMAL(
        precision: int = 10, scale: int = 0, **options: Any
    ) -> AttributeDefinition:
        typed = {"precision": precision, "scale": scale}
        return _define(TypeTag.DECIMAL, typed, options)

    @staticmethod
    def JSON(**options: Any) -> AttributeDefinition:
        return _define(TypeTag.JSON, {}, options)

    @staticmethod
    def UUID(**options: Any) -> AttributeDefinition:
        return _define(TypeTag.UUID, {}, options)
