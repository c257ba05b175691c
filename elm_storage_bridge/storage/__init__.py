from __future__ import annotations

from elm_storage_bridge.storage.store import JsonFileStore, KeyValueStore, MemoryStore, open_store

__all__ = ["JsonFileStore", "KeyValueStore", "MemoryStore", "open_store"]
