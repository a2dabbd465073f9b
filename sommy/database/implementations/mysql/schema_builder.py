"""MySQL and MariaDB schema builder implementation."""

from sqlalchemy.dialects import mysql
from sqlalchemy.engine import Dialect as SQLAlchemyDialect

from sommy.data_types import AttributeDefinition
from sommy.database.interfaces.schema_builder import SchemaBuilder
from sommy.database.utils import BACKTICK, quote_identifier
from sommy.types import Dialect, TypeTag

INTEGER_TYPES = {
    TypeTag.INTEGER: "INT",
    TypeTag.BIGINT: "BIGINT",
    TypeTag.SMALLINT: "SMALLINT",
}


class MySQLSchemaBuilder(SchemaBuilder):
    """MySQL-specific schema builder, shared with MariaDB."""

    dialect = Dialect.MYSQL
    type_names = {
        TypeTag.TEXT: "TEXT",
        TypeTag.BOOLEAN: "TINYINT(1)",
        TypeTag.DATE: "DATE",
        TypeTag.DATETIME: "DATETIME",
        TypeTag.TIME: "TIME",
        TypeTag.TIMESTAMP: "TIMESTAMP",
        TypeTag.FLOAT: "FLOAT",
        TypeTag.JSON: "JSON",
        TypeTag.UUID: "CHAR(36)",
    }

    @classmethod
    def sqlalchemy_dialect(cls) -> SQLAlchemyDialect:
        return mysql.dialect()

    def quote_identifier(self, name: str) -> str:
        return quote_identifier(name, BACKTICK)

    def primary_key_inline(self, attribute: AttributeDefinition) -> bool:
        return attribute.type.is_integer and attribute.primary_key

    def integer_type(self, attribute: AttributeDefinition, inline_pk: bool) -> str:
        parts = [INTEGER_TYPES[attribute.type]]
        if attribute.auto_increment:
            parts.append("AUTO_INCREMENT")
        if inline_pk:
            parts.append("PRIMARY KEY")
        return " ".join(parts)


class MariaDBSchemaBuilder(MySQLSchemaBuilder):
    """MariaDB schema builder."""

    dialect = Dialect.MARIADB
