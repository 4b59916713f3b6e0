"""
Logging setup for OPC Interpreter.

Library modules log through ``logging.getLogger(__name__)`` and never install
handlers themselves. Applications call :func:`configure_logging` once to route the
``opc_interpreter`` loggers to a rich console handler and, optionally, a rotating file.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "opc_interpreter"

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
_STREAM_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _level_value(level: str) -> int:
    if not isinstance(level, str) or level.upper() not in _LEVELS:
        raise ValueError(f"Invalid log level: {level}")
    return getattr(logging, level.upper())


def configure_logging(level: str = "INFO", use_rich: bool = True,
                      log_file: Optional[str] = None, console: Optional[Console] = None,
                      max_file_size: int = 10 * 1024 * 1024, backup_count: int = 5) -> logging.Logger:
    """
    Configure logging for the opc_interpreter package.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_rich: Use a rich console handler instead of a plain stream handler
        log_file: Optional log file path (rotating)
        console: Rich console to log to (defaults to a new stderr console)
        max_file_size: Maximum log file size in bytes
        backup_count: Number of rotated files to keep

    Returns:
        The configured package logger
    """
    level_value = _level_value(level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level_value)
    logger.handlers.clear()

    if use_rich:
        handler: logging.Handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=True,
            show_path=True,
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_STREAM_FORMAT, datefmt=_DATE_FORMAT))
    handler.setLevel(level_value)
    logger.addHandler(handler)

    if log_file:
        add_file_handler(logger, log_file, level, max_file_size, backup_count)

    return logger


def add_file_handler(logger: logging.Logger, file_path: str, level: str = "INFO",
                     max_file_size: int = 10 * 1024 * 1024, backup_count: int = 5) -> None:
    """
    Add a rotating file handler to logger.

    Args:
        logger: Logger instance
        file_path: Log file path
        level: Log level for this handler
        max_file_size: Maximum log file size in bytes
        backup_count: Number of backup files to keep
    """
    if not file_path or not isinstance(file_path, str):
        raise ValueError("File path must be a non-empty string")

    log_dir = os.path.dirname(file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = RotatingFileHandler(file_path, maxBytes=max_file_size, backupCount=backup_count)
    file_handler.setLevel(_level_value(level))
    file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT))
    logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger below the package logger.

    Args:
        name: Logger name, either a dotted module path or a short suffix

    Returns:
        Logger instance
    """
    if not name or not isinstance(name, str):
        raise ValueError("Logger name must be a non-empty string")
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
