"""PostgreSQL schema builder implementation."""

from sqlalchemy.dialects import postgresql
from sqlalchemy.engine import Dialect as SQLAlchemyDialect

from sommy.data_types import AttributeDefinition
from sommy.database.interfaces.schema_builder import SchemaBuilder
from sommy.database.utils import DOUBLE_QUOTE, quote_identifier
from sommy.types import Dialect, TypeTag

SERIAL_TYPES = {
    TypeTag.INTEGER: "SERIAL",
    TypeTag.BIGINT: "BIGSERIAL",
}


class PostgreSQLSchemaBuilder(SchemaBuilder):
    """PostgreSQL-specific schema builder."""

    dialect = Dialect.PGSQL
    type_names = {
        TypeTag.TEXT: "TEXT",
        TypeTag.BOOLEAN: "BOOLEAN",
        TypeTag.DATE: "DATE",
        TypeTag.DATETIME: "TIMESTAMP",
        TypeTag.TIME: "TIME",
        TypeTag.TIMESTAMP: "TIMESTAMP",
        TypeTag.FLOAT: "FLOAT",
        TypeTag.JSON: "JSON",
        TypeTag.UUID: "UUID",
    }

    @classmethod
    def sqlalchemy_dialect(cls) -> SQLAlchemyDialect:
        return postgresql.dialect()

    def quote_identifier(self, name: str) -> str:
        return quote_identifier(name, DOUBLE_QUOTE)

    def primary_key_inline(self, attribute: AttributeDefinition) -> bool:
        # SERIAL columns declare their own key, whether flagged primary or not
        return attribute.type in SERIAL_TYPES and attribute.auto_increment

    def integer_type(self, attribute: AttributeDefinition, inline_pk: bool) -> str:
        if attribute.auto_increment and attribute.type in SERIAL_TYPES:
            serial = SERIAL_TYPES[attribute.type]
            return f"{serial} PRIMARY KEY" if inline_pk else serial
        return "INTEGER"
