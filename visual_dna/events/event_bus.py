"""Synchronous event bus for lab notifications.

The lab publishes surprises and chaos-triggered mutations here; renderers,
loggers and the HTTP layer subscribe without the lab knowing about them.
Dispatch is immediate and in registration order, so tests can assert on
delivered events right after the call that produced them.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")


class EventBus:
    """Type-keyed synchronous publish/subscribe.

    Example:
        bus = EventBus()
        bus.subscribe(SurpriseDiscoveredEvent, on_surprise)
        bus.emit(SurpriseDiscoveredEvent(experiment=entry))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable]] = defaultdict(list)

    def emit(self, event: object) -> int:
        """Deliver ``event`` to every handler subscribed to its exact type.

        Handler exceptions propagate to the caller.

        Returns:
            Number of handlers that received the event
        """
        handlers = self._handlers.get(type(event))
        if not handlers:
            return 0
        for handler in list(handlers):
            handler(event)
        return len(handlers)

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> bool:
        """Remove a handler; returns False if it was not subscribed."""
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def clear_subscribers(self) -> None:
        self._handlers.clear()

    def subscriber_count(self, event_type: type) -> int:
        return len(self._handlers.get(event_type, []))
