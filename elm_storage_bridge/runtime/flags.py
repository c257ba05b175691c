from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable

from elm_storage_bridge.bridge.cache import CacheSnapshot


Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class Viewport:
    """Window geometry reported by the host."""

    inner_width: int = 0
    inner_height: int = 0
    client_width: int | None = None
    client_height: int | None = None

    @property
    def scrollbar_size(self) -> tuple[int, int]:
        # Scrollbars take up the difference between window and document width.
        cw = self.inner_width if self.client_width is None else self.client_width
        ch = self.inner_height if self.client_height is None else self.client_height
        return (self.inner_width - cw, self.inner_height - ch)


@dataclass(frozen=True, slots=True)
class Flags:
    now: int
    view_size: tuple[int, int]
    scrollbar_size: tuple[int, int]
    cache: CacheSnapshot

    def to_json(self) -> dict[str, Any]:
        return {
            "now": self.now,
            "viewSize": list(self.view_size),
            "scrollbarSize": list(self.scrollbar_size),
            "cache": dict(self.cache),
        }


def build_flags(cache: CacheSnapshot, *, viewport: Viewport | None = None, clock: Clock | None = None) -> Flags:
    vp = viewport or Viewport()
    now_s = (clock or time.time)()
    return Flags(
        now=int(now_s * 1000),
        view_size=(vp.inner_width, vp.inner_height),
        scrollbar_size=vp.scrollbar_size,
        cache=cache,
    )
