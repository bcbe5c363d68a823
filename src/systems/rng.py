"""Domain-separated deterministic RNG using xxhash.

The outcome of a draw depends ONLY on
WorldSeed + Domain + EntityID + Tick. Call order must not matter.

Formula: RNG_Value = Hash(WorldSeed, Domain, EntityID, Tick)
"""

from __future__ import annotations

import struct
from typing import Sequence, TypeVar

import xxhash

from src.core.enums import Domain

T = TypeVar("T")


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, entity_id, tick) -
    no internal mutable state, therefore fully thread-safe.  Callers that
    need several draws for the same entity in the same tick offset the
    tick argument (``tick + 1``, ``tick + 2`` ...).
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, entity_id: int, tick: int) -> int:
        payload = struct.pack("<qiqq", self._seed, domain.value, entity_id, tick)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, entity_id: int, tick: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, entity_id, tick) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, entity_id: int, tick: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, entity_id, tick)
        return low + int(f * (high - low + 1))

    def next_bool(self, domain: Domain, entity_id: int, tick: int, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain, entity_id, tick) < probability

    def weighted_choice(
        self,
        items: Sequence[T],
        weights: Sequence[float],
        domain: Domain,
        entity_id: int,
        tick: int,
    ) -> T:
        """Pick one of *items* with probability proportional to *weights*.

        Items with a non-positive weight are never picked unless every weight
        is non-positive, in which case the first item is returned.
        """
        if not items:
            raise ValueError("weighted_choice() needs at least one item")
        if len(items) != len(weights):
            raise ValueError("items and weights must have the same length")

        total = sum(w for w in weights if w > 0)
        if total <= 0:
            return items[0]

        roll = self.next_float(domain, entity_id, tick) * total
        cumulative = 0.0
        chosen = items[0]
        for item, w in zip(items, weights):
            if w <= 0:
                continue
            cumulative += w
            chosen = item
            if roll < cumulative:
                break
        return chosen
