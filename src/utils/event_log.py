"""Thread-safe narration log: battle text and event text, in tick order."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SimEvent:
    """A single narrated line."""

    tick: int
    category: str
    message: str
    entity_ids: tuple[int, ...] = ()  # IDs of actors involved in this event


class EventLog:
    """Event log. Writers append; readers snapshot a slice.

    Unbounded unless *maxlen* is given, in which case the oldest lines drop.
    Thread-safe via a simple lock - reads are non-blocking copies.
    """

    __slots__ = ("_buffer", "_lock")

    def __init__(self, maxlen: int | None = None) -> None:
        self._buffer: deque[SimEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def append(self, event: SimEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def append_many(self, events: list[SimEvent]) -> None:
        with self._lock:
            self._buffer.extend(events)

    def since_tick(self, tick: int) -> list[SimEvent]:
        """Return all events with tick >= *tick*."""
        with self._lock:
            return [e for e in self._buffer if e.tick >= tick]

    def by_category(self, category: str) -> list[SimEvent]:
        with self._lock:
            return [e for e in self._buffer if e.category == category]

    def latest(self, count: int = 50) -> list[SimEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def messages(self) -> list[str]:
        with self._lock:
            return [e.message for e in self._buffer]

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)
