#!/usr/bin/env python3
"""Demonstration of declaring an entity and running CRUD on SQLite."""

from sommy import DataTypes, SommyManager
from sommy.log import get_logger, setup_logging


def main() -> None:
    """Declare a User entity, insert a row and query it back."""
    setup_logging()
    logger = get_logger(__name__)

    with SommyManager({"dialect": "sqlite", "path": ":memory:"}) as orm:
        if not orm.authenticate():
            logger.error("Database is not reachable")
            return

        User = orm.define(
            "User",
            {
                "id": DataTypes.INTEGER(primary_key=True, auto_increment=True),
                "name": DataTypes.STRING(100),
                "email": DataTypes.STRING(150),
            },
            {"tableName": "users"},
        )
        orm.get_query_interface().create_table("users", User.attributes)

        user = User.build()
        user.name = "Clinton"
        user.email = "clinton@example.com"
        user.save()
        logger.info(f"Saved user with id {user.id}")

        for found in User.find_all({"email": "clinton@example.com"}):
            logger.info(f"Found {found.name} <{found.email}> (id={found.id})")

        user.email = "clinton@example.org"
        user.save()
        deleted = user.delete()
        logger.info(f"Deleted {deleted} user(s), {User.count()} left")


if __name__ == "__main__":
    main()
