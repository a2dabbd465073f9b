"""Tests for the dialect query builders."""

import pytest

from sommy.database.implementations import (
    QUERY_BUILDERS,
    MariaDBQueryBuilder,
    PostgreSQLQueryBuilder,
    SQLiteQueryBuilder,
    get_query_builder,
)
from sommy.exceptions import ConfigurationError, StatementBuildError
from sommy.types import Dialect


@pytest.fixture
def query_builder() -> SQLiteQueryBuilder:
    """Create SQLite query builder instance."""
    return SQLiteQueryBuilder()


def test_every_dialect_has_a_builder() -> None:
    """Test the factory covers every dialect."""
    assert set(QUERY_BUILDERS) == set(Dialect)
    assert isinstance(get_query_builder("MariaDB"), MariaDBQueryBuilder)
    assert isinstance(get_query_builder("postgres"), PostgreSQLQueryBuilder)

    with pytest.raises(ConfigurationError):
        get_query_builder("mssql")


def test_select_all(query_builder: SQLiteQueryBuilder) -> None:
    """Test a SELECT without options."""
    sql, params = query_builder.select("users")

    assert sql == 'SELECT * FROM "users"'
    assert params == {}


def test_select_column_specs(query_builder: SQLiteQueryBuilder) -> None:
    """Test star, dotted, aliased and raw column specs."""
    sql, _ = query_builder.select(
        "users",
        ["id", "users.name", "users.*", "COUNT(*) AS total", "email AS mail"],
    )

    assert sql == (
        'SELECT "id", "users"."name", "users".*, COUNT(*) AS "total", '
        '"email" AS "mail" FROM "users"'
    )


def test_select_single_column_string(query_builder: SQLiteQueryBuilder) -> None:
    """Test a single column may be passed as a string."""
    sql, _ = query_builder.select("users", "name")
    assert sql == 'SELECT "name" FROM "users"'


def test_select_with_predicates(query_builder: SQLiteQueryBuilder) -> None:
    """Test NULL, IN and equality predicates."""
    sql, params = query_builder.select(
        "users", where={"status": None, "id": [4, 5], "name": "x"}
    )

    assert sql == (
        'SELECT * FROM "users" WHERE "status" IS NULL AND '
        '"id" IN (:id_0_0, :id_0_1) AND "name" = :name_2'
    )
    assert params == {"id_0_0": 4, "id_0_1": 5, "name_2": "x"}


def test_select_with_empty_in_list(query_builder: SQLiteQueryBuilder) -> None:
    """Test an empty list matches nothing."""
    sql, params = query_builder.select("users", where={"id": []})

    assert sql == 'SELECT * FROM "users" WHERE 1=0'
    assert params == {}


def test_select_with_tuple_predicate(query_builder: SQLiteQueryBuilder) -> None:
    """Test tuples are treated like lists."""
    sql, params = query_builder.select("users", where={"id": (1,)})

    assert sql == 'SELECT * FROM "users" WHERE "id" IN (:id_0_0)'
    assert params == {"id_0_0": 1}


def test_parameter_names_never_collide(query_builder: SQLiteQueryBuilder) -> None:
    """Test generated names stay unique when column names look like them."""
    sql, params = query_builder.select("t", where={"a_1": 5, "a": [6, 7]})

    assert sql == (
        'SELECT * FROM "t" WHERE "a_1" = :a_1_0 AND "a" IN (:a_1_0_1, :a_1_1)'
    )
    assert params == {"a_1_0": 5, "a_1_0_1": 6, "a_1_1": 7}


def test_parameter_names_are_sanitized(query_builder: SQLiteQueryBuilder) -> None:
    """Test dotted and spaced column names yield valid parameter names."""
    sql, params = query_builder.select("users", where={"users.first name": "Ann"})

    assert sql == (
        'SELECT * FROM "users" WHERE "users"."first name" = :users_first_name_0'
    )
    assert params == {"users_first_name_0": "Ann"}


@pytest.mark.parametrize(
    "order, expected",
    [
        ({"name": "desc", "id": None}, 'ORDER BY "name" DESC, "id" ASC'),
        ({"name": "sideways"}, 'ORDER BY "name" ASC'),
        ("created_at DESC", "ORDER BY created_at DESC"),
        (["name ASC", "id DESC"], "ORDER BY name ASC, id DESC"),
    ],
)
def test_select_order(
    query_builder: SQLiteQueryBuilder, order: object, expected: str
) -> None:
    """Test ORDER BY forms."""
    sql, _ = query_builder.select("users", order=order)  # type: ignore[arg-type]
    assert sql == f'SELECT * FROM "users" {expected}'


def test_select_limit_and_offset(query_builder: SQLiteQueryBuilder) -> None:
    """Test LIMIT and OFFSET rendering."""
    sql, _ = query_builder.select("users", limit=10, offset=20)
    assert sql == 'SELECT * FROM "users" LIMIT 10 OFFSET 20'


def test_negative_limit_is_clamped(query_builder: SQLiteQueryBuilder) -> None:
    """Test negative values are clamped to zero."""
    sql, _ = query_builder.select("users", limit=-3, offset=-1)
    assert sql == 'SELECT * FROM "users" LIMIT 0 OFFSET 0'


@pytest.mark.parametrize(
    "dialect, expected",
    [
        (Dialect.SQLITE, 'SELECT * FROM "users" LIMIT -1 OFFSET 5'),
        (Dialect.MYSQL, "SELECT * FROM `users` LIMIT 18446744073709551615 OFFSET 5"),
        (Dialect.MARIADB, "SELECT * FROM `users` LIMIT 18446744073709551615 OFFSET 5"),
        (Dialect.PGSQL, 'SELECT * FROM "users" OFFSET 5'),
    ],
)
def test_offset_without_limit(dialect: Dialect, expected: str) -> None:
    """Test an offset alone still skips rows on every dialect."""
    sql, _ = get_query_builder(dialect).select("users", offset=5)
    assert sql == expected


def test_full_select_on_mysql() -> None:
    """Test every clause together with backtick quoting."""
    sql, params = get_query_builder(Dialect.MYSQL).select(
        "users",
        ["id", "order"],
        {"order": 3},
        order={"id": "DESC"},
        limit=1,
    )

    assert sql == (
        "SELECT `id`, `order` FROM `users` WHERE `order` = :order_0 "
        "ORDER BY `id` DESC LIMIT 1"
    )
    assert params == {"order_0": 3}


def test_insert(query_builder: SQLiteQueryBuilder) -> None:
    """Test INSERT rendering."""
    sql, params = query_builder.insert(
        "users", {"name": "Clinton", "email": "clinton@example.com"}
    )

    assert sql == 'INSERT INTO "users" ("name", "email") VALUES (:name, :email)'
    assert params == {"name": "Clinton", "email": "clinton@example.com"}


def test_insert_returning_only_on_postgresql() -> None:
    """Test RETURNING is added where the dialect supports it."""
    pg_sql, _ = get_query_builder(Dialect.PGSQL).insert(
        "users", {"name": "a"}, returning="id"
    )
    my_sql, _ = get_query_builder(Dialect.MYSQL).insert(
        "users", {"name": "a"}, returning="id"
    )

    assert pg_sql == 'INSERT INTO "users" ("name") VALUES (:name) RETURNING "id"'
    assert my_sql == "INSERT INTO `users` (`name`) VALUES (:name)"


def test_insert_empty_data(query_builder: SQLiteQueryBuilder) -> None:
    """Test INSERT with no values is rejected."""
    with pytest.raises(StatementBuildError, match="Cannot insert empty data"):
        query_builder.insert("users", {})


def test_update(query_builder: SQLiteQueryBuilder) -> None:
    """Test UPDATE rendering."""
    sql, params = query_builder.update("users", {"name": "Bob"}, {"id": 1})

    assert sql == 'UPDATE "users" SET "name" = :name WHERE "id" = :id_0'
    assert params == {"name": "Bob", "id_0": 1}


def test_update_where_params_avoid_set_params(
    query_builder: SQLiteQueryBuilder,
) -> None:
    """Test WHERE parameters never reuse a SET parameter name."""
    sql, params = query_builder.update("users", {"name_0": "x"}, {"name": "y"})

    assert sql == 'UPDATE "users" SET "name_0" = :name_0 WHERE "name" = :name_0_1'
    assert params == {"name_0": "x", "name_0_1": "y"}


def test_update_without_where(query_builder: SQLiteQueryBuilder) -> None:
    """Test UPDATE without a predicate touches every row."""
    sql, _ = query_builder.update("users", {"active": False})
    assert sql == 'UPDATE "users" SET "active" = :active'


def test_update_empty_data(query_builder: SQLiteQueryBuilder) -> None:
    """Test UPDATE with no values is rejected."""
    with pytest.raises(StatementBuildError, match="Cannot update with empty data"):
        query_builder.update("users", {}, {"id": 1})


def test_delete(query_builder: SQLiteQueryBuilder) -> None:
    """Test DELETE rendering."""
    assert query_builder.delete("users") == ('DELETE FROM "users"', {})

    sql, params = query_builder.delete("users", {"id": [1, 2]})
    assert sql == 'DELETE FROM "users" WHERE "id" IN (:id_0_0, :id_0_1)'
    assert params == {"id_0_0": 1, "id_0_1": 2}


def test_count() -> None:
    """Test COUNT rendering."""
    sql, params = get_query_builder(Dialect.MYSQL).count("users", {"name": "a"})

    assert sql == "SELECT COUNT(*) FROM `users` WHERE `name` = :name_0"
    assert params == {"name_0": "a"}
