# src/multikmeans/core/events.py
"""Event bus for clustering observability.

A simple synchronous bus that carries progress events from the
RunCoordinator to whoever presents them (CLI formatters, tests).
"""

from collections.abc import Callable
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class EventBusProtocol(Protocol):
    """Satisfied by both EventBus and NullEventBus without inheritance."""

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None: ...

    def emit(self, event: T) -> None: ...


class EventBus:
    """Synchronous event bus.

    Handlers run in subscription order on the emitting thread. Handler
    exceptions propagate to the emitter.

    Example:
        bus = EventBus()
        bus.subscribe(RunConverged, lambda e: print(f"run {e.run} done"))
    """

    def __init__(self) -> None:
        self._subscribers: dict[type, list[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        """Subscribe a handler to an event type."""
        self._subscribers.setdefault(event_type, []).append(handler)

    def emit(self, event: T) -> None:
        """Dispatch ``event`` to the handlers of its exact type.

        Events nobody subscribed to are ignored.
        """
        for handler in self._subscribers.get(type(event), []):
            handler(event)


class NullEventBus:
    """No-op bus for library use.

    Does NOT inherit from EventBus: subscribing to it is a no-op, and
    inheritance would hide that from anyone expecting callbacks.
    """

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        pass

    def emit(self, event: T) -> None:
        pass
