"""
Settings for the echostore data-access layer.

Simple, reliable environment variable configuration for the document store
backend and logging.
"""

import os
import tomllib
from pathlib import Path

from dotenv import load_dotenv

# Load .env file for local development - look in current working directory
load_dotenv(".env")

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
VALID_ENVIRONMENTS = ["DEV", "PROD"]
VALID_STORE_BACKENDS = ["memory", "json", "redis"]


def _get_version_from_pyproject() -> str:
    """
    Read version from pyproject.toml file.

    Returns:
        Version string from pyproject.toml, or fallback version
    """
    current_path = Path(__file__)
    for parent in [current_path.parent, *current_path.parents]:
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.exists():
            try:
                with open(pyproject_path, "rb") as f:
                    pyproject_data = tomllib.load(f)
                    version = pyproject_data.get("project", {}).get("version")
                    if version:
                        return version
            except (OSError, tomllib.TOMLDecodeError):
                continue

    return "0.1.0"


class Settings:
    """Application settings with environment-based configuration."""

    def __init__(self):
        # ================================================================
        # Version
        # ================================================================
        self.version: str = _get_version_from_pyproject()

        # ================================================================
        # Environment & Logging
        # ================================================================
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_dir: str = os.getenv("LOG_DIR", "./logs")
        self.environment: str = os.getenv("ENVIRONMENT", "DEV")

        # ================================================================
        # Document Store Configuration
        # ================================================================
        self.store_backend: str = os.getenv("STORE_BACKEND", "memory")

        # JSON file store (only used if STORE_BACKEND=json)
        self.json_store_dir: str = os.getenv("JSON_STORE_DIR", "./data")

        # ================================================================
        # Redis Configuration (Optional)
        # ================================================================
        self.redis_url: str | None = os.getenv("REDIS_URL")
        self.redis_max_connections: int = int(os.getenv("REDIS_MAX_CONNECTIONS", "64"))
        self.redis_key_prefix: str = os.getenv("REDIS_KEY_PREFIX", "echo")

        self._validate_settings()

    def _validate_settings(self):
        """Validate settings values."""
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {VALID_LOG_LEVELS}")
        self.log_level = self.log_level.upper()

        if self.environment.upper() not in VALID_ENVIRONMENTS:
            self.environment = "DEV"  # Default fallback
        self.environment = self.environment.upper()

        if self.store_backend.lower() not in VALID_STORE_BACKENDS:
            raise ValueError(f"STORE_BACKEND must be one of {VALID_STORE_BACKENDS}")
        self.store_backend = self.store_backend.lower()

    @property
    def has_redis(self) -> bool:
        """Check if Redis is configured."""
        return self.redis_url is not None

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "DEV"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "PROD"


# Global settings instance
settings = Settings()
