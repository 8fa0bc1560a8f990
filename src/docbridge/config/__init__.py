"""Application configuration helpers."""

from __future__ import annotations

from .document_store import DocumentStoreConfig, get_document_store_config, parse_durability
from .env import env_flag, optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, InvalidSettingError, MissingConfigurationError
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "DocumentStoreConfig",
    "InvalidSettingError",
    "MissingConfigurationError",
    "StorageConfig",
    "configure_logging",
    "env_flag",
    "get_database_config",
    "get_document_store_config",
    "get_storage_config",
    "optional_env_var",
    "parse_durability",
    "require_env_var",
    "require_env_vars",
]
