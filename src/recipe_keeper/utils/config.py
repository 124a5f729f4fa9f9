"""
Configuration management for the Recipe Keeper application.

This module handles:
- Database path and URL configuration
- Environment-specific configuration (development vs. production)
- Environment variable overrides (RECIPE_KEEPER_*)
"""

import logging
import os
from pathlib import Path
from typing import Optional

from .constants import DATABASE_FILENAME

logger = logging.getLogger(__name__)

ENV_ENVIRONMENT = "RECIPE_KEEPER_ENV"
ENV_DATABASE_URL = "RECIPE_KEEPER_DATABASE_URL"
ENV_DB_TIMEOUT = "RECIPE_KEEPER_DB_TIMEOUT"

DEFAULT_DB_TIMEOUT = 30


class Config:
    """
    Application configuration manager.

    Handles database location and connection settings for the
    selected environment.
    """

    def __init__(self, environment: str = "production"):
        """
        Initialize configuration.

        Args:
            environment: Environment mode - 'production' or 'development'
        """
        self.environment = environment

        if environment == "development":
            self._base_dir = self._get_project_data_dir()
        else:
            self._base_dir = self._get_user_documents_dir()

        self._database_dir = self._base_dir
        self._database_path = self._database_dir / DATABASE_FILENAME
        self._database_url_override = os.environ.get(ENV_DATABASE_URL) or None
        self._db_timeout = self._read_int_env(ENV_DB_TIMEOUT, DEFAULT_DB_TIMEOUT)

    def _get_project_data_dir(self) -> Path:
        """Get the project's data/ directory for development."""
        project_root = Path(__file__).parent.parent.parent.parent
        return project_root / "data"

    def _get_user_documents_dir(self) -> Path:
        """Get the app directory under the user's Documents folder."""
        return Path.home() / "Documents" / "RecipeKeeper"

    @staticmethod
    def _read_int_env(name: str, default: int) -> int:
        raw = os.environ.get(name)
        if raw is None or raw == "":
            return default
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Invalid {name}={raw!r}, using default {default}")
            return default
        if value <= 0:
            logger.warning(f"Invalid {name}={raw!r}, using default {default}")
            return default
        return value

    def ensure_directories(self) -> None:
        """Create the database directory if it doesn't exist."""
        self._database_dir.mkdir(parents=True, exist_ok=True)

    @property
    def database_path(self) -> Path:
        """Full path to the database file."""
        return self._database_path

    @property
    def database_url(self) -> str:
        """
        SQLAlchemy database URL.

        Returns:
            RECIPE_KEEPER_DATABASE_URL if set, otherwise a SQLite URL for
            the environment's database file
        """
        if self._database_url_override:
            return self._database_url_override
        db_path_str = str(self._database_path).replace("\\", "/")
        return f"sqlite:///{db_path_str}"

    @property
    def has_database_url_override(self) -> bool:
        """True when RECIPE_KEEPER_DATABASE_URL replaces the default database file."""
        return self._database_url_override is not None

    @property
    def db_timeout(self) -> int:
        """Seconds SQLite waits on a locked database before failing."""
        return self._db_timeout

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def database_exists(self) -> bool:
        """Check if the database file exists."""
        return self._database_path.exists()

    def __repr__(self) -> str:
        return f"Config(environment='{self.environment}', database_url='{self.database_url}')"


_config_instance: Optional[Config] = None


def get_config(environment: Optional[str] = None) -> Config:
    """
    Get the global configuration instance.

    Once created, the singleton's environment cannot be changed by passing
    a different environment argument.

    Args:
        environment: Optional environment for initial creation. If None, uses
                    RECIPE_KEEPER_ENV or defaults to production. Ignored if
                    the singleton already exists.

    Returns:
        Config instance
    """
    global _config_instance

    if _config_instance is None:
        if environment is None:
            environment = os.environ.get(ENV_ENVIRONMENT, "production")
        _config_instance = Config(environment)
    elif environment is not None and environment != _config_instance.environment:
        logger.warning(
            f"get_config() called with environment='{environment}' but singleton "
            f"already exists with environment='{_config_instance.environment}'. "
            f"Returning existing singleton to prevent database switching."
        )

    return _config_instance


def reset_config():
    """
    Reset the global configuration instance.

    Useful for testing.
    """
    global _config_instance
    _config_instance = None

