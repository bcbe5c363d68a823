"""Process-wide publish/subscribe for named lifecycle events.

The engine only publishes (``player:transfer``, ``player:collectible``);
chat, persistence and other subsystems subscribe.  Delivery is
fire-and-forget: a failing subscriber is logged and isolated so it can
never break the tick that published the event.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any]], None]

PLAYER_TRANSFER = "player:transfer"
PLAYER_COLLECTIBLE = "player:collectible"


class EventEmitter:
    """Named-event fan-out to registered handlers."""

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: defaultdict[str, list[Handler]] = defaultdict(list)

    def on(self, event: str, handler: Handler) -> None:
        self._handlers[event].append(handler)

    def off(self, event: str, handler: Handler) -> None:
        if handler in self._handlers.get(event, []):
            self._handlers[event].remove(handler)

    def emit(self, event: str, payload: dict[str, Any]) -> int:
        """Deliver *payload* to every handler of *event*. Returns the handler count."""
        handlers = list(self._handlers.get(event, []))
        for handler in handlers:
            try:
                handler(payload)
            except Exception:
                handler_name = getattr(handler, "__qualname__", repr(handler))
                logger.exception("Handler %s failed for event %s", handler_name, event)
        return len(handlers)


emitter = EventEmitter()
