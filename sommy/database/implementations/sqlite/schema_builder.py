"""SQLite schema builder implementation."""

from sqlalchemy.dialects import sqlite
from sqlalchemy.engine import Dialect as SQLAlchemyDialect

from sommy.data_types import AttributeDefinition
from sommy.database.interfaces.schema_builder import SchemaBuilder
from sommy.database.utils import DOUBLE_QUOTE, quote_identifier
from sommy.types import Dialect, TypeTag


class SQLiteSchemaBuilder(SchemaBuilder):
    """SQLite-specific schema builder."""

    dialect = Dialect.SQLITE
    type_names = {
        TypeTag.TEXT: "TEXT",
        TypeTag.BOOLEAN: "TINYINT(1)",
        TypeTag.DATE: "DATE",
        TypeTag.DATETIME: "DATETIME",
        TypeTag.TIME: "TIME",
        TypeTag.TIMESTAMP: "TIMESTAMP",
        TypeTag.FLOAT: "FLOAT",
        TypeTag.JSON: "TEXT",
        TypeTag.UUID: "CHAR(36)",
    }

    @classmethod
    def sqlalchemy_dialect(cls) -> SQLAlchemyDialect:
        return sqlite.dialect()

    def quote_identifier(self, name: str) -> str:
        return quote_identifier(name, DOUBLE_QUOTE)

    def primary_key_inline(self, attribute: AttributeDefinition) -> bool:
        return attribute.type.is_integer and attribute.primary_key

    def integer_type(self, attribute: AttributeDefinition, inline_pk: bool) -> str:
        # Only "INTEGER PRIMARY KEY" aliases the rowid
        if not inline_pk:
            return "INTEGER"
        if attribute.auto_increment:
            return "INTEGER PRIMARY KEY AUTOINCREMENT"
        return "INTEGER PRIMARY KEY"
