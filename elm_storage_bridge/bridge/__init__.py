from __future__ import annotations

from elm_storage_bridge.bridge.cache import Cache, CacheEntry, build_snapshot, handle_outbound_entry
from elm_storage_bridge.bridge.parse import ParseFailure, ParseOk, dump_json, parse_json, parse_truthy_or_null
from elm_storage_bridge.bridge.ports import App, Port, PortHelpers, subscribe_if_available

__all__ = [
    "App",
    "Cache",
    "CacheEntry",
    "ParseFailure",
    "ParseOk",
    "Port",
    "PortHelpers",
    "build_snapshot",
    "dump_json",
    "handle_outbound_entry",
    "parse_json",
    "parse_truthy_or_null",
    "subscribe_if_available",
]
