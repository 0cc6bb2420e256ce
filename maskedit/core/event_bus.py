"""EventBus — notifies host listeners about edit outcomes and config changes."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable

from maskedit.core.events import Event, EventType

logger = logging.getLogger(__name__)

Handler = Callable[[Event], None]


class EventBus:
    """Synchronous pub/sub; a failing listener never breaks editing."""

    def __init__(self):
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """Register *handler* and return a callable that removes it again."""
        self._handlers[event_type].append(handler)
        return lambda: self.unsubscribe(event_type, handler)

    def unsubscribe(self, event_type: EventType, handler: Handler) -> None:
        if handler in self._handlers.get(event_type, []):
            self._handlers[event_type].remove(handler)

    def has_subscribers(self, event_type: EventType) -> bool:
        return bool(self._handlers.get(event_type))

    def publish(self, event: Event) -> int:
        """Deliver *event* to its handlers in registration order.

        Returns the number of handlers that completed without raising.
        """
        delivered = 0
        for handler in list(self._handlers.get(event.type, [])):
            try:
                handler(event)
            except Exception:
                logger.exception("Listener %r failed for %s", handler, event.type.name)
            else:
                delivered += 1
        return delivered
