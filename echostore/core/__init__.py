"""
echostore core components

Provides access to configuration and logging. Repository wiring lives in
echostore.core.factory.
"""

from .config.settings import settings
from .logging import get_logger, setup_app_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_app_logging",
]
