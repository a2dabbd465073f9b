"""Tests for the column type catalog."""

import dataclasses

import pytest

from sommy.data_types import AttributeDefinition, DataTypes
from sommy.types import TypeTag


def test_integer_defaults() -> None:
    """Test a bare constructor yields a nullable plain column."""
    attribute = DataTypes.INTEGER()

    assert attribute.type == TypeTag.INTEGER
    assert attribute.length is None
    assert attribute.allow_null is True
    assert attribute.unique is False
    assert attribute.primary_key is False
    assert attribute.auto_increment is False
    assert attribute.has_default is False


def test_string_length() -> None:
    """Test STRING maps to VARCHAR with a default length."""
    assert DataTypes.STRING().length == 255
    assert DataTypes.STRING(100).type == TypeTag.VARCHAR
    assert DataTypes.STRING(100).length == 100
    assert DataTypes.VARCHAR(20).length == 20


def test_decimal_precision_and_scale() -> None:
    """Test DECIMAL carries precision and scale."""
    attribute = DataTypes.DECIMAL(8, 2, allow_null=False)

    assert attribute.type == TypeTag.DECIMAL
    assert (attribute.precision, attribute.scale) == (8, 2)
    assert attribute.allow_null is False


def test_options_merge_additively() -> None:
    """Test options are merged on top of the base definition."""
    attribute = DataTypes.INTEGER(
        primary_key=True, auto_increment=True, unique=True, length=11
    )

    assert attribute.primary_key is True
    assert attribute.auto_increment is True
    assert attribute.unique is True
    assert attribute.length == 11


def test_options_can_not_override_type() -> None:
    """Test the base type wins over a type option."""
    assert DataTypes.TEXT(type="INTEGER").type == TypeTag.TEXT


def test_camel_case_options() -> None:
    """Test camelCase option names are accepted."""
    attribute = DataTypes.INTEGER(primaryKey=True, autoIncrement=True, allowNull=False)

    assert attribute.primary_key is True
    assert attribute.auto_increment is True
    assert attribute.allow_null is False


def test_default_marks_presence() -> None:
    """Test a NULL default is distinguished from no default."""
    assert DataTypes.TEXT(default=None).has_default is True
    assert DataTypes.BOOLEAN(default=False).default is False


def test_out_of_range_values_pass_through() -> None:
    """Test negative sizes are not validated."""
    assert DataTypes.STRING(-1).length == -1
    assert DataTypes.DECIMAL(-5, -1).precision == -5


def test_unknown_options_kept_as_extra() -> None:
    """Test options that name no field are kept instead of rejected."""
    attribute = DataTypes.STRING(
        100, comment="display name", validate={"isEmail": True}, allowNull=False
    )

    assert attribute.length == 100
    assert attribute.allow_null is False
    assert attribute.extra == {
        "comment": "display name",
        "validate": {"isEmail": True},
    }
    assert attribute == DataTypes.STRING(100, allowNull=False)


def test_unknown_options_from_mapping() -> None:
    """Test plain mappings keep unrecognized keys too."""
    attribute = AttributeDefinition.from_mapping({"type": "INT", "comment": "n"})

    assert attribute.type == TypeTag.INTEGER
    assert attribute.extra == {"comment": "n"}
    assert DataTypes.DATE().extra == {}


def test_definition_is_immutable() -> None:
    """Test definitions can not be mutated in place."""
    attribute = DataTypes.DATE()

    with pytest.raises(dataclasses.FrozenInstanceError):
        attribute.allow_null = False  # type: ignore[misc]

    changed = attribute.replace(allow_null=False, default="2024-01-01")
    assert attribute.allow_null is True
    assert changed.allow_null is False
    assert changed.has_default is True


def test_from_mapping() -> None:
    """Test definitions can be built from plain mappings."""
    attribute = AttributeDefinition.from_mapping(
        {"type": "string", "length": 50, "allowNull": False, "unique": True}
    )

    assert attribute.type == TypeTag.VARCHAR
    assert attribute.length == 50
    assert attribute.allow_null is False
    assert attribute.unique is True
    assert AttributeDefinition.from_mapping({"type": "INT"}).type == TypeTag.INTEGER


@pytest.mark.parametrize(
    "constructor, tag",
    [
        (DataTypes.BIGINT, TypeTag.BIGINT),
        (DataTypes.SMALLINT, TypeTag.SMALLINT),
        (DataTypes.TEXT, TypeTag.TEXT),
        (DataTypes.BOOLEAN, TypeTag.BOOLEAN),
        (DataTypes.DATE, TypeTag.DATE),
        (DataTypes.DATETIME, TypeTag.DATETIME),
        (DataTypes.TIME, TypeTag.TIME),
        (DataTypes.TIMESTAMP, TypeTag.TIMESTAMP),
        (DataTypes.FLOAT, TypeTag.FLOAT),
        (DataTypes.JSON, TypeTag.JSON),
        (DataTypes.UUID, TypeTag.UUID),
    ],
)
def test_constructor_tags(constructor, tag: TypeTag) -> None:
    """Test each constructor sets its type tag."""
    assert constructor().type == tag
