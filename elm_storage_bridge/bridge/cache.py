"""Whitelisted cache persisted through a :class:`KeyValueStore`.

On start the bridge reads every whitelisted key into a snapshot that becomes
part of the app's flags. Afterwards the app emits ``[key, value]`` pairs on its
outbound port; whitelisted ones are JSON-encoded and written back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

from elm_storage_bridge.bridge.parse import dump_json, parse_truthy_or_null
from elm_storage_bridge.config.model import validate_keys
from elm_storage_bridge.storage.store import KeyValueStore


logger = logging.getLogger(__name__)

CacheSnapshot = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class CacheEntry:
    key: str
    value: Any

    @classmethod
    def from_payload(cls, payload: Any) -> CacheEntry | None:
        """Build an entry from a port payload (a two-element ``[key, value]``)."""

        if isinstance(payload, (str, bytes)) or not isinstance(payload, Sequence):
            return None
        if len(payload) != 2 or not isinstance(payload[0], str):
            return None
        return cls(key=payload[0], value=payload[1])


def _as_key_list(keys: Iterable[str]) -> tuple[str, ...]:
    # A bare string would otherwise be treated as a whitelist of its characters.
    if isinstance(keys, (str, bytes)):
        raise TypeError(f"keys must be a collection of strings, not {type(keys).__name__}")
    return tuple(keys)


def build_snapshot(keys: Iterable[str], store: KeyValueStore) -> CacheSnapshot:
    """Read every key from ``store``; missing or unparseable values become None.

    The result holds exactly ``keys`` (in order) and is read-only.
    """

    snapshot = {key: parse_truthy_or_null(store.get(key)) for key in _as_key_list(keys)}
    return MappingProxyType(snapshot)


def handle_outbound_entry(entry: CacheEntry, keys: Iterable[str], store: KeyValueStore) -> bool:
    """Persist ``entry`` if its key is whitelisted.

    Returns True when a write happened. Invalid keys are logged, never raised.
    """

    keys = _as_key_list(keys)
    if entry.key not in keys:
        logger.error(
            "invalid_cache_key: %r not in %r",
            entry.key,
            list(keys),
            extra={"cache_key": entry.key, "valid_keys": list(keys)},
        )
        return False

    store.set(entry.key, dump_json(entry.value))
    logger.debug("cache_written", extra={"cache_key": entry.key})
    return True


class Cache:
    """Binds a whitelist to a store; the port-facing side of the bridge."""

    def __init__(self, keys: Sequence[str], store: KeyValueStore) -> None:
        self._keys = validate_keys(list(keys), path="keys")
        self._store = store

    @property
    def keys(self) -> tuple[str, ...]:
        return self._keys

    def get_all(self) -> CacheSnapshot:
        snapshot = build_snapshot(self._keys, self._store)
        logger.info(
            "snapshot_built",
            extra={"cache_keys": list(self._keys), "present": [k for k, v in snapshot.items() if v is not None]},
        )
        return snapshot

    def on_cache_kv(self, payload: Any) -> None:
        """Port callback for ``[key, value]`` payloads."""

        entry = CacheEntry.from_payload(payload)
        if entry is None:
            logger.error("malformed_cache_payload", extra={"payload": repr(payload)})
            return
        handle_outbound_entry(entry, self._keys, self._store)
