"""Collectibles - one-of-a-kind trophies found on map tiles."""

from __future__ import annotations

from typing import Iterator

from pydantic.dataclasses import dataclass as pydantic_dataclass


@pydantic_dataclass(frozen=True)
class CollectibleRecord:
    """Immutable record of where and when a collectible was found."""

    name: str
    map: str
    region: str = ""
    rarity: str = "basic"
    description: str = ""
    storyline: str = ""
    found_at: int = 0           # world tick it was picked up on


class CollectibleLedger:
    """The set of collectibles one actor owns, keyed by name."""

    __slots__ = ("_records",)

    def __init__(self, records: list[CollectibleRecord] | None = None) -> None:
        self._records: dict[str, CollectibleRecord] = {}
        for record in records or []:
            self.add(record)

    def has(self, name: str) -> bool:
        return name in self._records

    def add(self, record: CollectibleRecord) -> bool:
        """Store *record*. Returns False if a collectible of that name is already held."""
        if record.name in self._records:
            return False
        self._records[record.name] = record
        return True

    def get(self, name: str) -> CollectibleRecord | None:
        return self._records.get(name)

    def names(self) -> list[str]:
        return list(self._records)

    def __iter__(self) -> Iterator[CollectibleRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
