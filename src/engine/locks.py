"""Per-entity locks serialising writes to one actor's health and effects."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from src.core.models import Actor


class EntityLocks:
    """Hands out one re-entrant lock per actor id.

    Two casters hitting the same target take turns; casts against different
    targets never contend.
    """

    __slots__ = ("_locks", "_guard")

    def __init__(self) -> None:
        self._locks: dict[int, threading.RLock] = {}
        self._guard = threading.Lock()

    def lock_for(self, actor_id: int) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(actor_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[actor_id] = lock
            return lock

    @contextmanager
    def hold(self, actor: Actor) -> Iterator[None]:
        lock = self.lock_for(actor.id)
        with lock:
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


# Process-wide registry shared by the world loop and every battle
entity_locks = EntityLocks()
