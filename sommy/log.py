"""Logging configuration for the sommy ORM.

Library modules log under ``sommy.*``. Every executed statement goes to the
``sommy.sql`` logger, so SQL output can be raised or silenced on its own
without touching the rest of the ORM's messages.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import colorlog

if TYPE_CHECKING:
    from sommy.config import Settings

SQL_LOGGER_NAME = "sommy.sql"

BASE_LOG_FORMAT = (
    "%(asctime)s %(levelname)8s %(message)s (%(name)s@%(filename)s:%(lineno)d)"
)
DATE_FORMAT = "%m-%d %H:%M:%S"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}

LOG_FILE_NAME = "sommy.log"
TEST_LOG_FILE_NAME = "test.log"


def resolve_level(level: int | str) -> int:
    """Convert a level name such as ``"debug"`` to its number.

    Raises:
        ValueError: If the name is not a known logging level
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(
    level: int | str = logging.INFO,
    format_string: str | None = None,
    use_colors: bool = True,
    enable_file_logging: bool = False,
    log_dir: Path | None = None,
    is_test_env: bool = False,
    sql_level: int | str | None = None,
) -> None:
    """Configure logging for the sommy ORM.

    Args:
        level: Root logging level, as a number or a level name
        format_string: Custom format string for console messages
        use_colors: Whether to use colored console output
        enable_file_logging: Whether to also log to a file
        log_dir: Directory for log files (defaults to ./logs or ./logs/test)
        is_test_env: Whether this is a test environment
        sql_level: Level of the ``sommy.sql`` statement logger; None lets it
            follow the root level
    """
    if log_dir is None:
        log_dir = Path("logs")
        if is_test_env:
            log_dir = log_dir / "test"

    console_format = format_string or _get_console_format(use_colors)
    handlers = [_create_console_handler(console_format, use_colors)]

    if enable_file_logging:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(_create_file_handler(log_dir, is_test_env))

    logging.basicConfig(
        level=resolve_level(level),
        handlers=handlers,
        force=True,
    )

    sql_logger = logging.getLogger(SQL_LOGGER_NAME)
    if sql_level is None:
        sql_logger.setLevel(logging.NOTSET)
    else:
        sql_logger.setLevel(resolve_level(sql_level))


def _get_console_format(use_colors: bool) -> str:
    if use_colors:
        return (
            "%(asctime)s %(log_color)s%(levelname)8s%(reset)s %(message)s "
            "\033[90m(%(name)s@%(filename)s:%(lineno)d)\033[0m"
        )
    return BASE_LOG_FORMAT


def _create_console_handler(format_string: str, use_colors: bool) -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stdout)

    if use_colors:
        console_formatter: logging.Formatter = colorlog.ColoredFormatter(
            format_string,
            datefmt=DATE_FORMAT,
            log_colors=LOG_COLORS,
            style="%",
        )
    else:
        console_formatter = logging.Formatter(format_string, datefmt=DATE_FORMAT)

    console_handler.setFormatter(console_formatter)
    return console_handler


def _create_file_handler(log_dir: Path, is_test_env: bool) -> logging.Handler:
    """Create file handler; test runs overwrite, other runs rotate."""
    if is_test_env:
        file_handler: logging.Handler = logging.FileHandler(
            log_dir / TEST_LOG_FILE_NAME, mode="w"
        )
    else:
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            maxBytes=5 * 1024 * 1024,
            backupCount=4,
            encoding="utf-8",
        )

    file_handler.setFormatter(logging.Formatter(BASE_LOG_FORMAT, datefmt=DATE_FORMAT))
    return file_handler


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def get_sql_logger() -> logging.Logger:
    """Logger receiving every executed statement at DEBUG level."""
    return logging.getLogger(SQL_LOGGER_NAME)


def setup_production_logging(
    level: int | str = logging.INFO,
    log_dir: Path | None = None,
    sql_level: int | str | None = None,
) -> None:
    """Setup logging with a rotating log file."""
    setup_logging(
        level=level,
        enable_file_logging=True,
        log_dir=log_dir,
        is_test_env=False,
        sql_level=sql_level,
    )


def setup_test_logging(
    level: int | str = logging.DEBUG,
    log_dir: Path | None = None,
    sql_level: int | str | None = None,
) -> None:
    """Setup logging for tests, overwriting the test log file."""
    setup_logging(
        level=level,
        enable_file_logging=True,
        log_dir=log_dir,
        is_test_env=True,
        sql_level=sql_level,
    )


def configure_logging(settings: "Settings", log_dir: Path | None = None) -> None:
    """Apply the logging setup described by application settings.

    Production rotates a log file, testing overwrites the test log file and
    development logs to the console only. ``echo_sql`` opens the statement
    logger at DEBUG regardless of the root level.

    Args:
        settings: Application settings
        log_dir: Directory for log files (defaults per environment)
    """
    sql_level = logging.DEBUG if settings.echo_sql else None

    if settings.is_production:
        setup_production_logging(settings.log_level, log_dir, sql_level)
    elif settings.is_testing:
        setup_test_logging(settings.log_level, log_dir, sql_level)
    else:
        setup_logging(level=settings.log_level, sql_level=sql_level)
