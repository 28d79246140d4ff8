"""
Logging Configuration Module.

Every module logs through a child of the "bill_extraction" logger:

    from src.utils.logger import get_logger
    logger = get_logger(__name__)

Handlers are attached once, at startup, by setup_logger() or
setup_logger_from_config(). Until then records propagate to the root
logger unchanged, which is what library callers and the test suite see.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Union

import colorama
from colorama import Fore, Style

colorama.init()

# Root of the application logger hierarchy
LOGGER_NAMESPACE = "bill_extraction"

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Console formatter that colors the level name of each record."""

    LEVEL_COLORS = {
        logging.DEBUG: Fore.CYAN,
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.RED + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)

        # File handlers format the same record object
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        return super().format(record)


def _to_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    return logging.getLevelName(level.upper())


def _console_handler(level: int, log_format: str, date_format: str, colorize: bool) -> logging.Handler:
    formatter_class = ColoredFormatter if colorize else logging.Formatter

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter_class(log_format, datefmt=date_format))
    return handler


def _file_handler(
    log_file: Union[str, Path],
    level: int,
    log_format: str,
    date_format: str,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
    return handler


def setup_logger(
    level: Union[str, int] = "INFO",
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    log_file: Optional[Union[str, Path]] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    colorize: bool = True
) -> logging.Logger:
    """
    Attach console (and optionally rotating file) handlers to the
    application logger. Calling it again replaces the previous handlers.

    Args:
        level: Level name or number.
        log_format: Record format; DEFAULT_FORMAT when None.
        date_format: Timestamp format; DEFAULT_DATE_FORMAT when None.
        log_file: Rotating log file path; no file logging when None.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files kept.
        colorize: Color level names on the console.

    Returns:
        The application logger.
    """
    log_format = log_format or DEFAULT_FORMAT
    date_format = date_format or DEFAULT_DATE_FORMAT
    numeric_level = _to_level(level)

    app_logger = logging.getLogger(LOGGER_NAMESPACE)
    app_logger.setLevel(numeric_level)
    app_logger.handlers.clear()

    app_logger.addHandler(_console_handler(numeric_level, log_format, date_format, colorize))
    if log_file:
        app_logger.addHandler(
            _file_handler(log_file, numeric_level, log_format, date_format, max_bytes, backup_count)
        )

    app_logger.propagate = False
    app_logger.debug(f"Logging initialized at {logging.getLevelName(numeric_level)}")
    return app_logger


def set_level(level: Union[str, int]) -> None:
    """Change the level of the application logger and all its handlers."""
    numeric_level = _to_level(level)
    app_logger = logging.getLogger(LOGGER_NAMESPACE)

    app_logger.setLevel(numeric_level)
    for handler in app_logger.handlers:
        handler.setLevel(numeric_level)


def get_logger(name: str) -> logging.Logger:
    """
    Get the logger for a module.

    Example:
        >>> get_logger("src.pipeline").name
        'bill_extraction.src.pipeline'
    """
    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def setup_logger_from_config() -> logging.Logger:
    """Configure logging from the logging.* settings."""
    from config import get_config

    log_file = get_config("logging.file.path") if get_config("logging.file.enabled", False) else None

    return setup_logger(
        level=get_config("logging.level", "INFO"),
        log_format=get_config("logging.format"),
        date_format=get_config("logging.date_format"),
        log_file=log_file,
        max_bytes=get_config("logging.file.max_bytes", 10 * 1024 * 1024),
        backup_count=get_config("logging.file.backup_count", 5),
        colorize=get_config("logging.console.colorize", True)
    )
