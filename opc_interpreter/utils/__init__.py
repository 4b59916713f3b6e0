"""Helper utilities for OPC Interpreter."""

from .logger import configure_logging, add_file_handler, get_logger

__all__ = ["configure_logging", "add_file_handler", "get_logger"]
