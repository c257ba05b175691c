"""Host-side bootstrap for an Elm single-page application.

Persists whitelisted key/value pairs emitted on the app's ``cacheKV`` port and
replays them as initialization flags on the next start.
"""

from __future__ import annotations

from elm_storage_bridge.bridge.cache import Cache, CacheEntry, build_snapshot, handle_outbound_entry
from elm_storage_bridge.bridge.ports import App, Port, subscribe_if_available
from elm_storage_bridge.errors import BootstrapError, BridgeError, ConfigError
from elm_storage_bridge.runtime.lifecycle import bootstrap

__all__ = [
    "App",
    "BootstrapError",
    "BridgeError",
    "Cache",
    "CacheEntry",
    "ConfigError",
    "Port",
    "bootstrap",
    "build_snapshot",
    "handle_outbound_entry",
    "subscribe_if_available",
]
