from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from elm_storage_bridge.errors import ConfigError


_STORAGE_BACKENDS = {"file", "memory"}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError("must be a mapping", path=key)
    return value


def validate_keys(keys: Any, *, path: str = "cache.keys") -> tuple[str, ...]:
    """Check a whitelist: a list of unique, non-empty strings."""

    if not isinstance(keys, (list, tuple)) or not all(isinstance(k, str) for k in keys):
        raise ConfigError("must be a list of strings", path=path)

    seen: set[str] = set()
    for k in keys:
        if not k:
            raise ConfigError("keys must be non-empty", path=path)
        if k in seen:
            raise ConfigError(f"duplicate key {k!r}", path=path)
        seen.add(k)
    return tuple(keys)


@dataclass(frozen=True)
class CacheConfig:
    keys: tuple[str, ...] = ()
    port: str = "cacheKV"


@dataclass(frozen=True)
class StorageConfig:
    backend: str = "file"
    path: Path = Path(".local_storage.json")


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    json: bool = True


@dataclass(frozen=True)
class AppConfig:
    cache: CacheConfig = field(default_factory=CacheConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any], *, base_dir: Path | None = None) -> AppConfig:
        cache_raw = _section(raw, "cache")
        port = cache_raw.get("port", CacheConfig.port)
        if not isinstance(port, str) or not port.strip():
            raise ConfigError("must be a non-empty string", path="cache.port")
        cache = CacheConfig(keys=validate_keys(cache_raw.get("keys", [])), port=port)

        storage_raw = _section(raw, "storage")
        backend = str(storage_raw.get("backend", StorageConfig.backend))
        if backend not in _STORAGE_BACKENDS:
            raise ConfigError(f"unsupported backend: {backend!r}", path="storage.backend")
        storage_path = Path(str(storage_raw.get("path", StorageConfig.path))).expanduser()
        if base_dir is not None and not storage_path.is_absolute():
            storage_path = base_dir / storage_path
        storage = StorageConfig(backend=backend, path=storage_path)

        logging_raw = _section(raw, "logging")
        level = str(logging_raw.get("level", LoggingConfig.level)).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(f"unknown level: {level!r}", path="logging.level")
        log_cfg = LoggingConfig(
            level=level,
            json=bool(logging_raw.get("json", LoggingConfig.json)),
        )

        return cls(cache=cache, storage=storage, logging=log_cfg)
