# Path: org_flow/config_loader.py
"""
Configuration Loader for org_flow (Organization Flowchart)

Loads configuration from the .env file next to this module, falling back to
defaults for every value. Singleton pattern ensures consistent configuration
across all components.

No value is required: the hierarchy library and the CLI both run without a
.env file.
"""

import os
from typing import Optional, Any
from pathlib import Path
from dotenv import load_dotenv


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================

# Logging Defaults
DEFAULT_LOG_DIR: str = 'logs'
DEFAULT_LOG_LEVEL: str = 'INFO'

# Database Defaults
DEFAULT_DATABASE_URL: str = 'sqlite:///org_flow.db'

# Hierarchy Defaults
DEFAULT_CACHE_TTL_SECONDS: int = 300
DEFAULT_MAX_RESOLUTION_PASSES: int = 100
DEFAULT_SEARCH_LIMIT: int = 50
DEFAULT_JSON_INDENT: int = 2


class ConfigLoader:
    """
    Singleton configuration loader for org_flow.

    Loads configuration from environment variables with type conversion
    and defaults.

    Example:
        config = ConfigLoader()
        ttl = config.get('cache_ttl_seconds')   # Returns int
        log_dir = config.get('log_dir')         # Returns Path object
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern. Loads .env file on first
        instantiation.
        """
        if ConfigLoader._initialized:
            return

        # org_flow/config_loader.py -> .env is in same directory
        env_path = Path(__file__).resolve().parent / '.env'

        if env_path.exists():
            load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next instantiation re-reads the environment."""
        cls._instance = None
        cls._initialized = False

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load all configuration from environment.

        Returns:
            Dictionary of configuration values with proper types
        """
        config = {
            # ================================================================
            # ENVIRONMENT & DEBUG
            # ================================================================
            'environment': self._get_env('ORG_FLOW_ENVIRONMENT', 'development'),
            'debug': self._get_bool('ORG_FLOW_DEBUG', False),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_dir': self._get_path('ORG_FLOW_LOG_DIR') or Path(DEFAULT_LOG_DIR),
            'log_level': self._get_env('ORG_FLOW_LOG_LEVEL', DEFAULT_LOG_LEVEL),
            'log_console': self._get_bool('ORG_FLOW_LOG_CONSOLE', True),

            # ================================================================
            # HIERARCHY CONFIGURATION
            # ================================================================
            'cache_ttl_seconds': self._get_int(
                'ORG_FLOW_CACHE_TTL_SECONDS', DEFAULT_CACHE_TTL_SECONDS
            ),
            'max_resolution_passes': self._get_int(
                'ORG_FLOW_MAX_RESOLUTION_PASSES', DEFAULT_MAX_RESOLUTION_PASSES
            ),
            'search_limit': self._get_int('ORG_FLOW_SEARCH_LIMIT', DEFAULT_SEARCH_LIMIT),

            # ================================================================
            # OUTPUT CONFIGURATION
            # ================================================================
            'json_indent': self._get_int('ORG_FLOW_JSON_INDENT', DEFAULT_JSON_INDENT),

            # ================================================================
            # DATABASE CONFIGURATION
            # ================================================================
            'database_url': self._get_env('ORG_FLOW_DATABASE_URL', DEFAULT_DATABASE_URL),
            'db_echo': self._get_bool('ORG_FLOW_DB_ECHO', False),
            'db_pool_size': self._get_int('ORG_FLOW_DB_POOL_SIZE', 5),
            'db_pool_max_overflow': self._get_int('ORG_FLOW_DB_POOL_MAX_OVERFLOW', 10),
            'db_pool_timeout': self._get_int('ORG_FLOW_DB_POOL_TIMEOUT', 30),
            'db_pool_recycle': self._get_int('ORG_FLOW_DB_POOL_RECYCLE', 3600),
        }

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return self._config.get(key, default)

    def _get_path(self, key: str, required: bool = False) -> Optional[Path]:
        """
        Get path from environment variable.

        Args:
            key: Environment variable name
            required: If True, raise error when missing

        Returns:
            Path object or None

        Raises:
            ValueError: If required and missing
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ValueError(f"Required path not configured: {key}")
            return None

        if '${' in value:
            value = os.path.expandvars(value)

        return Path(value)

    def _get_env(self, key: str, default: str = '') -> str:
        """Get string environment variable."""
        return os.getenv(key, default)

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            return default

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ('true', '1', 'yes', 'on')

    def is_sqlite(self) -> bool:
        """Check whether the configured database is SQLite."""
        return self._config['database_url'].startswith('sqlite')

    def __repr__(self) -> str:
        return (
            f"ConfigLoader("
            f"environment={self._config.get('environment')}, "
            f"database_url={self._config.get('database_url')})"
        )


__all__ = ['ConfigLoader']
