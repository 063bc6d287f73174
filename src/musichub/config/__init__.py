"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .services import ServiceConfig, get_service_config
from .spotify import SpotifyConfig, get_spotify_config
from .storage import (
    DatabaseConfig,
    StorageConfig,
    get_database_config,
    get_http_cache_path,
    get_storage_config,
)
from .tidal import TidalConfig, get_tidal_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "ServiceConfig",
    "SpotifyConfig",
    "StorageConfig",
    "TidalConfig",
    "configure_logging",
    "get_database_config",
    "get_http_cache_path",
    "get_service_config",
    "get_spotify_config",
    "get_storage_config",
    "get_tidal_config",
    "require_env_vars",
]
