from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pytest

from elm_storage_bridge.bridge.ports import App, Port, PortHelpers, subscribe_if_available


@dataclass(slots=True)
class Recorder:
    seen: list = field(default_factory=list)

    def __call__(self, payload: object) -> None:
        self.seen.append(payload)


def test_subscribe_if_available_registers_handler() -> None:
    port = Port("cacheKV")
    app = App(ports={"cacheKV": port})
    rec = Recorder()

    assert subscribe_if_available(app, "cacheKV", rec) is True

    port.send(["theme", "dark"])
    port.send(["theme", "light"])
    assert rec.seen == [["theme", "dark"], ["theme", "light"]]


def test_subscribe_if_available_without_ports_is_silent_noop(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG)

    assert subscribe_if_available(App(ports=None), "cacheKV", Recorder()) is False
    assert subscribe_if_available(App(ports={"other": Port("other")}), "cacheKV", Recorder()) is False
    assert caplog.records == []


def test_port_send_is_synchronous_and_ordered() -> None:
    port = Port("p")
    order: list[str] = []
    port.subscribe(lambda _: order.append("first"))
    port.subscribe(lambda _: order.append("second"))

    port.send(None)
    assert order == ["first", "second"]


def test_port_helpers_log_missing_port(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR)

    helpers = PortHelpers(App())
    assert helpers.subscribe("cacheKV", Recorder()) is False
    assert "cacheKV.subscribe Port Not Found" in caplog.text


def test_port_helpers_subscribe_existing_port() -> None:
    port = Port("cacheKV")
    rec = Recorder()
    assert PortHelpers(App(ports={"cacheKV": port})).subscribe("cacheKV", rec) is True
    port.send("x")
    assert rec.seen == ["x"]
