"""Application configuration helpers."""

from __future__ import annotations

from .display import SelectionDisplayConfig, get_selection_display_config
from .env import optional_env_flag, optional_env_var
from .errors import ConfigurationError
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "SelectionDisplayConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_selection_display_config",
    "get_storage_config",
    "optional_env_flag",
    "optional_env_var",
]
