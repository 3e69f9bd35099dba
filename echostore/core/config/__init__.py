"""Configuration module for echostore."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
