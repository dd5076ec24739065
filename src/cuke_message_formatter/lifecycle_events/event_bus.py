"""Synchronous, typed lifecycle event bus."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

_LOGGER = logging.getLogger(__name__)

EventT = TypeVar("EventT")


class LifecycleEventSource(Protocol):
    """Event source handle a formatter subscribes to."""

    def subscribe(self, event_type: type[EventT], handler: Callable[[EventT], None]) -> None: ...


class LifecycleEventBus:
    """In-process event dispatcher delivering one event at a time.

    Handlers registered for an event type run in subscription order on the
    publishing thread. Handler exceptions propagate to the publisher.
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: type[EventT], handler: Callable[[EventT], None]) -> None:
        """Register a handler for exactly one event type."""
        self._handlers.setdefault(event_type, []).append(handler)

    def publish(self, event: object) -> None:
        """Deliver an event to every handler subscribed to its type."""
        handlers = self._handlers.get(type(event), [])
        if not handlers:
            _LOGGER.debug("No subscribers for %s", type(event).__name__)
        for handler in handlers:
            handler(event)
