"""Application start-up: snapshot, flags, init, port wiring."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Sequence

from elm_storage_bridge.bridge.cache import Cache
from elm_storage_bridge.bridge.ports import App, subscribe_if_available
from elm_storage_bridge.errors import BootstrapError
from elm_storage_bridge.runtime.flags import Clock, Viewport, build_flags
from elm_storage_bridge.storage.store import KeyValueStore


logger = logging.getLogger(__name__)

InitFn = Callable[[dict[str, Any]], App]
AppModule = Mapping[str, InitFn]


def init_app_module(module: AppModule, flags: dict[str, Any]) -> App:
    """Initialize the first entry point exposed by ``module``."""

    if not module:
        raise BootstrapError("Application module exposes no entry points")
    name = next(iter(module))
    logger.info("app_init", extra={"entry_point": name})
    return module[name](flags)


def bootstrap(
    module: AppModule,
    *,
    store: KeyValueStore,
    keys: Sequence[str],
    port_name: str = "cacheKV",
    viewport: Viewport | None = None,
    clock: Clock | None = None,
) -> App:
    """Start the app with cached flags and persist what it sends on ``port_name``.

    The snapshot is fully built before ``init`` runs. When the app has no such
    port, persistence is simply inactive.
    """

    cache = Cache(keys, store)
    flags = build_flags(cache.get_all(), viewport=viewport, clock=clock)

    app = init_app_module(module, flags.to_json())

    if subscribe_if_available(app, port_name, cache.on_cache_kv):
        logger.info("cache_port_subscribed", extra={"port": port_name})
    return app
