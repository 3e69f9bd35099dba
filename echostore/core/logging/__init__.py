"""Logging module for echostore."""

from .context import clear_operation_context, operation_context, set_operation_context
from .logger import ContextLogger, get_logger, setup_app_logging, setup_logging

__all__ = [
    "ContextLogger",
    "clear_operation_context",
    "get_logger",
    "operation_context",
    "set_operation_context",
    "setup_app_logging",
    "setup_logging",
]
