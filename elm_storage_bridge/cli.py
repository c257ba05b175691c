from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from elm_storage_bridge.bridge.cache import Cache, CacheEntry, handle_outbound_entry
from elm_storage_bridge.config.loader import load_app_config
from elm_storage_bridge.config.model import LOG_LEVELS, AppConfig
from elm_storage_bridge.errors import ConfigError
from elm_storage_bridge.observability.logging import configure_logging
from elm_storage_bridge.storage.store import open_store


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CONFIG = 2
EXIT_INVALID_KEY = 3


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="elm-storage-bridge",
        description="Inspect and update the whitelisted cache replayed into the app's flags",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level; overrides logging.level",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("configs/app.yaml"),
        help="Path to a YAML config file",
    )
    parser.add_argument(
        "--overlay",
        type=Path,
        default=None,
        help="Optional YAML file merged over --config section by section",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("snapshot", help="Print the cache snapshot for the configured keys")

    put_p = sub.add_parser("put", help="Write a JSON value as if the app sent it on the cache port")
    put_p.add_argument("key")
    put_p.add_argument("value", help="JSON-encoded value")

    sub.add_parser("print-config", help="Load and print the expanded config")

    return parser


def _config_dump(cfg: AppConfig) -> dict:
    return {
        "cache": {"keys": list(cfg.cache.keys), "port": cfg.cache.port},
        "storage": {"backend": cfg.storage.backend, "path": str(cfg.storage.path)},
        "logging": {"level": cfg.logging.level, "json": cfg.logging.json},
    }


def _write_json(obj: object) -> None:
    sys.stdout.write(json.dumps(obj, ensure_ascii=False, indent=2))
    sys.stdout.write("\n")


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    try:
        ns = parser.parse_args(argv)
    except SystemExit as e:
        code = e.code
        return int(code) if isinstance(code, int) else EXIT_ERROR

    try:
        cfg = load_app_config(ns.config, overlay=ns.overlay)
    except ConfigError as e:
        configure_logging(level=ns.log_level or "INFO")
        logger.error("config_error", extra={"error": str(e)})
        sys.stderr.write(f"ConfigError: {e}\n")
        return EXIT_CONFIG

    configure_logging(level=ns.log_level or cfg.logging.level, json_output=cfg.logging.json)
    logger.debug(
        "config_loaded",
        extra={"config_file": str(ns.config), "overlay": str(ns.overlay) if ns.overlay else None},
    )

    try:
        if ns.command == "print-config":
            _write_json(_config_dump(cfg))
            return EXIT_OK

        store = open_store(cfg.storage)

        if ns.command == "snapshot":
            _write_json(dict(Cache(cfg.cache.keys, store).get_all()))
            return EXIT_OK

        try:
            value = json.loads(ns.value)
        except json.JSONDecodeError as e:
            sys.stderr.write(f"Invalid JSON value: {e}\n")
            return EXIT_CONFIG

        written = handle_outbound_entry(CacheEntry(ns.key, value), cfg.cache.keys, store)
        return EXIT_OK if written else EXIT_INVALID_KEY

    except Exception as e:  # noqa: BLE001
        logger.exception("fatal_error")
        sys.stderr.write(f"Fatal error: {e}\n")
        return EXIT_ERROR
