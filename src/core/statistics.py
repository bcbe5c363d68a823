"""Per-actor statistic counters keyed by dot-separated paths.

Keys look like ``Combat.Utilize.Fire`` or ``Character.Maps.Norkos``.  Unknown
keys read as 0 so gating checks never need to pre-seed a counter.
"""

from __future__ import annotations


class Statistics:
    """Flat counter store with dotted keys."""

    __slots__ = ("_stats",)

    def __init__(self, initial: dict[str, float] | None = None) -> None:
        self._stats: dict[str, float] = dict(initial or {})

    def increment_stat(self, key: str, value: float = 1) -> float:
        new = self._stats.get(key, 0) + value
        self._stats[key] = new
        return new

    def get_stat(self, key: str) -> float:
        return self._stats.get(key, 0)

    def set_stat(self, key: str, value: float) -> None:
        self._stats[key] = value

    def with_prefix(self, prefix: str) -> dict[str, float]:
        """All counters under *prefix* (e.g. ``Character.Maps``)."""
        head = prefix.rstrip(".") + "."
        return {k: v for k, v in self._stats.items() if k.startswith(head)}

    def as_dict(self) -> dict[str, float]:
        return dict(self._stats)

    def __len__(self) -> int:
        return len(self._stats)
