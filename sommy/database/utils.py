"""SQL building utilities shared by every dialect."""

import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from sqlalchemy import String, literal
from sqlalchemy.engine import Dialect as SQLAlchemyDialect

from sommy.types import DatabaseParamType, PredicateType

QuoteFunc = Callable[[str], str]

BACKTICK = "`"
DOUBLE_QUOTE = '"'

_PARAM_UNSAFE = re.compile(r"[^A-Za-z0-9_]")
_ALIAS_SPEC = re.compile(r"^(?P<expr>.+?)\s+AS\s+(?P<alias>\S+)$", re.IGNORECASE)


def quote_identifier(name: str, quote_char: str) -> str:
    """Quote a possibly dotted identifier.

    Each dot-separated part is wrapped in ``quote_char`` with embedded quote
    characters doubled; a bare ``*`` part is left as is.

    Example:
        >>> quote_identifier("users.order", '"')
        '"users"."order"'
    """
    parts = []
    for part in name.split("."):
        if part == "*":
            parts.append(part)
        else:
            escaped = part.replace(quote_char, quote_char * 2)
            parts.append(f"{quote_char}{escaped}{quote_char}")
    return ".".join(parts)


def is_raw_expression(spec: str) -> bool:
    """Check if a column spec is an expression to pass through unquoted."""
    return "(" in spec or ")" in spec or " " in spec


def build_column_list(columns: Sequence[str] | str | None, quote: QuoteFunc) -> str:
    """Build the column list of a SELECT statement.

    Supports ``*``, ``table.*``, ``expr AS alias`` and ``table.column`` /
    ``column`` specs. Raw expressions are not quoted.
    """
    if columns is None:
        return "*"
    if isinstance(columns, str):
        columns = [columns]
    if not columns:
        return "*"
    return ", ".join(_column_spec(spec.strip(), quote) for spec in columns)


def _column_spec(spec: str, quote: QuoteFunc) -> str:
    if spec == "*":
        return spec

    match = _ALIAS_SPEC.match(spec)
    if match:
        expr = match.group("expr").strip()
        if not is_raw_expression(expr):
            expr = quote(expr)
        return f"{expr} AS {quote(match.group('alias'))}"

    if is_raw_expression(spec):
        return spec
    return quote(spec)


def referenced_columns(columns: Sequence[str] | str | None) -> list[str]:
    """List the plain column names a column list refers to.

    Stars and raw expressions are skipped; an aliased plain column yields
    the column, not the alias.
    """
    if columns is None:
        return []
    if isinstance(columns, str):
        columns = [columns]

    names = []
    for spec in columns:
        spec = spec.strip()
        match = _ALIAS_SPEC.match(spec)
        if match:
            spec = match.group("expr").strip()
        if spec == "*" or spec.endswith(".*") or is_raw_expression(spec):
            continue
        names.append(spec)
    return names


def sanitize_param_name(name: str) -> str:
    """Reduce a column name to characters valid in a bind parameter name."""
    return _PARAM_UNSAFE.sub("_", name)


def unique_param_name(base: str, *taken: Mapping[str, Any]) -> str:
    """Return ``base``, or ``base`` with a numeric suffix, unused in ``taken``."""
    name = base
    suffix = 1
    while any(name in params for params in taken):
        name = f"{base}_{suffix}"
        suffix += 1
    return name


def build_where_clause(
    conditions: PredicateType | None,
    quote: QuoteFunc,
    reserved: Mapping[str, Any] | None = None,
) -> tuple[str, DatabaseParamType]:
    """Build a parameterized WHERE clause from a predicate mapping.

    Args:
        conditions: Column to value mapping. ``None`` becomes ``IS NULL``, a
            list or tuple becomes ``IN (...)`` (``1=0`` when empty), anything
            else becomes ``=``.
        quote: Identifier quoting function of the target dialect
        reserved: Parameters already bound by the statement, whose names
            must not be reused

    Returns:
        Tuple of (where_clause, parameters_dict)

    Example:
        >>> build_where_clause({"name": "John", "age": [30, 31]}, quote)
        ('WHERE "name" = :name_0 AND "age" IN (:age_1_0, :age_1_1)',
         {"name_0": "John", "age_1_0": 30, "age_1_1": 31})
    """
    if not conditions:
        return "", {}

    reserved = reserved or {}
    clauses: list[str] = []
    params: DatabaseParamType = {}

    for column, value in conditions.items():
        column_sql = quote(column)
        base = f"{sanitize_param_name(column)}_{len(params)}"

        if value is None:
            clauses.append(f"{column_sql} IS NULL")
        elif isinstance(value, (list, tuple)):
            if not value:
                clauses.append("1=0")
                continue
            placeholders = []
            for index, item in enumerate(value):
                name = unique_param_name(f"{base}_{index}", params, reserved)
                params[name] = item
                placeholders.append(f":{name}")
            clauses.append(f"{column_sql} IN ({', '.join(placeholders)})")
        else:
            name = unique_param_name(base, params, reserved)
            params[name] = value
            clauses.append(f"{column_sql} = :{name}")

    return f"WHERE {' AND '.join(clauses)}", params


def normalize_direction(direction: Any) -> str:
    """Normalize a sort direction to ``ASC`` or ``DESC``."""
    if isinstance(direction, str) and direction.strip().upper() == "DESC":
        return "DESC"
    return "ASC"


def build_order_by_clause(
    order: str | Mapping[str, Any] | Sequence[str] | None, quote: QuoteFunc
) -> str:
    """Build ORDER BY clause.

    Args:
        order: Raw ORDER BY text, a mapping of column to direction, or a list
            of raw terms
        quote: Identifier quoting function of the target dialect

    Returns:
        ORDER BY clause string

    Example:
        >>> build_order_by_clause({"name": "desc", "id": None}, quote)
        'ORDER BY "name" DESC, "id" ASC'
    """
    if not order:
        return ""

    if isinstance(order, str):
        return f"ORDER BY {order}"

    if isinstance(order, Mapping):
        terms = [
            f"{quote(column)} {normalize_direction(direction)}"
            for column, direction in order.items()
        ]
    else:
        terms = list(order)

    return f"ORDER BY {', '.join(terms)}"


def to_non_negative_int(value: Any) -> int:
    """Cast a LIMIT or OFFSET value to a non-negative integer."""
    return max(0, int(value))


def build_limit_clause(
    limit: int | None, offset: int | None = None, unbounded: str | None = None
) -> str:
    """Build LIMIT clause with optional OFFSET.

    Args:
        limit: Maximum number of rows to return
        offset: Number of rows to skip
        unbounded: LIMIT value meaning "no limit", used when only an offset
            is given; ``None`` renders a bare OFFSET

    Returns:
        LIMIT clause string

    Example:
        >>> build_limit_clause(10, 20)
        'LIMIT 10 OFFSET 20'
    """
    if limit is None and offset is None:
        return ""

    parts: list[str] = []
    if limit is not None:
        parts.append(f"LIMIT {to_non_negative_int(limit)}")
    elif unbounded is not None:
        parts.append(f"LIMIT {unbounded}")

    if offset is not None:
        parts.append(f"OFFSET {to_non_negative_int(offset)}")

    return " ".join(parts)


def render_string_literal(value: str, dialect: SQLAlchemyDialect) -> str:
    """Render a string as a quoted SQL literal using the dialect's escaping.

    The literal is meant for statements sent without parameters, so the
    percent doubling applied for format and pyformat drivers is undone.
    """
    expression = literal(value, String())
    compiled = expression.compile(
        dialect=dialect, compile_kwargs={"literal_binds": True}
    )
    rendered = str(compiled)
    if dialect.paramstyle in ("format", "pyformat"):
        rendered = rendered.replace("%%", "%")
    return rendered
