"""Application configuration helpers."""

from __future__ import annotations

from .errors import ConfigurationError
from .importer import DEFAULT_DEPOT_RADIUS_KM, ImportConfig, get_import_config
from .logging import configure_logging
from .storage import (
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_database_uri,
    get_storage_config,
)

__all__ = [
    "DEFAULT_DEPOT_RADIUS_KM",
    "ConfigurationError",
    "DatabaseConfig",
    "ImportConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_database_uri",
    "get_import_config",
    "get_storage_config",
]
