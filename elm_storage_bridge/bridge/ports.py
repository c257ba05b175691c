from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping


logger = logging.getLogger(__name__)

PortCallback = Callable[[Any], None]


class Port:
    """An outbound app-to-host channel.

    ``send`` runs every subscriber synchronously, in subscription order.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._subscribers: list[PortCallback] = []

    def subscribe(self, callback: PortCallback) -> None:
        self._subscribers.append(callback)

    def send(self, payload: Any) -> None:
        for callback in list(self._subscribers):
            callback(payload)


@dataclass(slots=True)
class App:
    """Handle returned by an application's ``init``.

    ``ports`` is None when the app was compiled without any ports.
    """

    ports: Mapping[str, Port] | None = None

    def port(self, name: str) -> Port | None:
        if self.ports is None:
            return None
        return self.ports.get(name)


def subscribe_if_available(app: App, channel_name: str, handler: PortCallback) -> bool:
    """Subscribe ``handler`` when ``app`` exposes ``channel_name``; otherwise no-op."""

    port = app.port(channel_name)
    if port is None:
        return False
    port.subscribe(handler)
    return True


class PortHelpers:
    """Strict subscribe helper: a missing port is logged rather than skipped silently."""

    def __init__(self, app: App) -> None:
        self._app = app

    def subscribe(self, port_name: str, callback: PortCallback) -> bool:
        if subscribe_if_available(self._app, port_name, callback):
            return True
        logger.error("port_not_found: %s.subscribe Port Not Found", port_name, extra={"port": port_name})
        return False
