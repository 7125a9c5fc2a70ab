# tests/core/test_events.py
"""Tests for EventBus infrastructure."""

from dataclasses import dataclass

import pytest

from multikmeans.core.events import EventBus, EventBusProtocol, NullEventBus


@dataclass(frozen=True)
class SampleEvent:
    value: str


@dataclass(frozen=True)
class OtherEvent:
    count: int


class TestEventBus:
    def test_subscribe_and_emit(self) -> None:
        bus = EventBus()
        received: list[SampleEvent] = []

        bus.subscribe(SampleEvent, received.append)
        bus.emit(SampleEvent(value="hello"))

        assert received == [SampleEvent(value="hello")]

    def test_handlers_called_in_subscription_order(self) -> None:
        bus = EventBus()
        calls: list[str] = []

        bus.subscribe(SampleEvent, lambda e: calls.append("first"))
        bus.subscribe(SampleEvent, lambda e: calls.append("second"))
        bus.emit(SampleEvent(value="x"))

        assert calls == ["first", "second"]

    def test_dispatch_is_by_exact_type(self) -> None:
        bus = EventBus()
        received: list[object] = []

        bus.subscribe(OtherEvent, received.append)
        bus.emit(SampleEvent(value="ignored"))

        assert received == []

    def test_emit_without_subscribers_is_silent(self) -> None:
        EventBus().emit(SampleEvent(value="nobody listening"))

    def test_handler_exception_propagates(self) -> None:
        bus = EventBus()

        def broken(event: SampleEvent) -> None:
            raise RuntimeError("formatter bug")

        bus.subscribe(SampleEvent, broken)

        with pytest.raises(RuntimeError, match="formatter bug"):
            bus.emit(SampleEvent(value="boom"))


class TestNullEventBus:
    def test_subscribe_is_noop(self) -> None:
        bus = NullEventBus()
        received: list[SampleEvent] = []

        bus.subscribe(SampleEvent, received.append)
        bus.emit(SampleEvent(value="dropped"))

        assert received == []

    def test_not_an_event_bus_subclass(self) -> None:
        assert not isinstance(NullEventBus(), EventBus)

    def test_both_satisfy_protocol(self) -> None:
        buses: list[EventBusProtocol] = [EventBus(), NullEventBus()]
        assert len(buses) == 2
