from __future__ import annotations

import logging
from typing import Iterator

import pytest

from elm_storage_bridge.storage.store import MemoryStore


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    root = logging.getLogger()
    level = root.level
    yield
    # CLI tests install a stderr handler bound to the captured stream.
    handler = getattr(root, "_bridge_handler", None)
    if handler is not None:
        root.removeHandler(handler)
        delattr(root, "_bridge_handler")
    root.setLevel(level)
