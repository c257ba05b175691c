"""Persistent string key/value stores.

The bridge only needs ``get`` and ``set``; both are synchronous and
last-write-wins. Values are opaque strings (the bridge stores JSON text).
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from elm_storage_bridge.config.model import StorageConfig


logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal interface of a local-storage-like backend."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Dict-backed store. Contents are lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def items(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileStore:
    """Durable store kept as a single JSON object on disk.

    The file is re-read on every ``get`` so separate processes sharing a path
    see each other's writes. A missing file is an empty store; a corrupt one
    reads as empty and is replaced on the next ``set``.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}

        try:
            data = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as e:
            logger.warning("storage_file_corrupt", extra={"path": str(self._path), "error": str(e)})
            return {}

        if not isinstance(data, dict):
            logger.warning("storage_file_corrupt", extra={"path": str(self._path), "error": "root is not an object"})
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2, sort_keys=True)
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def items(self) -> dict[str, str]:
        return self._read_all()


def open_store(cfg: StorageConfig) -> KeyValueStore:
    if cfg.backend == "memory":
        return MemoryStore()
    return JsonFileStore(cfg.path)
