from __future__ import annotations

import json
import logging

from elm_storage_bridge.observability.logging import JsonFormatter, configure_logging


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord("elm_storage_bridge.test", logging.ERROR, __file__, 1, "invalid_cache_key", None, None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_json_formatter_includes_extras() -> None:
    line = JsonFormatter().format(_record(cache_key="color", valid_keys=["theme"]))
    payload = json.loads(line)

    assert payload["level"] == "ERROR"
    assert payload["logger"] == "elm_storage_bridge.test"
    assert payload["message"] == "invalid_cache_key"
    assert payload["cache_key"] == "color"
    assert payload["valid_keys"] == ["theme"]
    assert "ts" in payload


def test_configure_logging_is_idempotent() -> None:
    root = logging.getLogger()
    before = len(root.handlers)

    configure_logging(level="debug")
    configure_logging(level="warning", json_output=False)

    assert len(root.handlers) == before + 1
    assert root.level == logging.WARNING
