"""Configuration loading and schema.

- YAML-first configuration under configs/*.yaml
- Strict ${ENV_VAR} expansion (missing/empty env vars are errors)
"""

from __future__ import annotations

from elm_storage_bridge.config.loader import load_app_config, load_config
from elm_storage_bridge.config.model import AppConfig, CacheConfig, LoggingConfig, StorageConfig
from elm_storage_bridge.errors import ConfigError

__all__ = [
    "AppConfig",
    "CacheConfig",
    "ConfigError",
    "LoggingConfig",
    "StorageConfig",
    "load_app_config",
    "load_config",
]
