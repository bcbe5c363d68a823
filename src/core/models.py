"""Core data models: Vector2, Resource, Party, Actor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from src.core.collectibles import CollectibleLedger
from src.core.effects import EffectCollection
from src.core.enums import Gender
from src.core.personalities import Personalities
from src.core.statistics import Statistics

if TYPE_CHECKING:
    from src.battle.battle import BattleHooks


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def manhattan(self, other: Vector2) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(slots=True)
class Resource:
    """A bounded pool such as health or mana."""

    current: int
    maximum: int

    def sub(self, amount: int) -> int:
        self.current = max(0, min(self.maximum, self.current - amount))
        return self.current

    def add(self, amount: int) -> int:
        self.current = max(0, min(self.maximum, self.current + amount))
        return self.current

    def restore(self) -> None:
        self.current = self.maximum

    def apply(self, oper: str, amount: int) -> int:
        """Apply ``sub`` or ``add`` by name."""
        if oper == "add":
            return self.add(amount)
        return self.sub(amount)

    @property
    def ratio(self) -> float:
        return self.current / self.maximum if self.maximum > 0 else 0.0


def _default_resources() -> dict[str, Resource]:
    return {"hp": Resource(100, 100), "mp": Resource(50, 50)}


def _default_stats() -> dict[str, int]:
    return {"str": 10, "int": 10, "con": 10, "dex": 10, "agi": 10, "luk": 10}


@dataclass(slots=True)
class Actor:
    """A player, pet or monster that moves around the world and fights."""

    id: int
    name: str
    level: int = 1
    profession_name: str = "Generalist"
    secondary_professions: set[str] = field(default_factory=set)
    gender: Gender = Gender.MALE
    resources: dict[str, Resource] = field(default_factory=_default_resources)
    stats: dict[str, int] = field(default_factory=_default_stats)
    personalities: Personalities = field(default_factory=Personalities)
    collectibles: CollectibleLedger = field(default_factory=CollectibleLedger)
    achievements: set[str] = field(default_factory=set)
    statistics: Statistics | None = field(default_factory=Statistics)
    effects: EffectCollection = field(default_factory=EffectCollection)
    abilities: list[str] = field(default_factory=lambda: ["attack"])
    combat_effects: list[str] = field(default_factory=list)
    # Summoned proxies (pets) point at the player that owns them
    owner: Actor | None = None
    # World position
    map: str = ""
    x: int = 0
    y: int = 0
    map_region: str = ""
    old_region: str = ""
    last_dir: int = 0               # previous numpad direction, 0 = none
    step_cooldown: int = 0
    party: Party | None = None
    battle: BattleHooks | None = None

    @property
    def hp(self) -> int:
        return self.resources["hp"].current

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @property
    def pos(self) -> Vector2:
        return Vector2(self.x, self.y)

    @property
    def party_name(self) -> str:
        return self.party.name if self.party else ""

    def has_profession(self, profession: str) -> bool:
        return profession == self.profession_name or profession in self.secondary_professions

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Actor) and other.id == self.id

    def __repr__(self) -> str:
        return f"Actor({self.id}, {self.name!r}, {self.profession_name} Lv{self.level})"


def effective_identity_subject(actor: Actor) -> Actor:
    """The actor whose collectibles and personalities count for *actor*.

    Summoned proxies defer to their owner; everyone else is their own subject.
    """
    return actor.owner if actor.owner is not None else actor


class Party:
    """A group of actors travelling together. The first member leads."""

    __slots__ = ("name", "members")

    def __init__(self, name: str, members: list[Actor] | None = None) -> None:
        self.name = name
        self.members: list[Actor] = []
        for member in members or []:
            self.add(member)

    @property
    def leader(self) -> Actor | None:
        return self.members[0] if self.members else None

    def add(self, actor: Actor) -> None:
        if actor not in self.members:
            self.members.append(actor)
        actor.party = self

    def remove(self, actor: Actor) -> None:
        if actor in self.members:
            self.members.remove(actor)
        if actor.party is self:
            actor.party = None

    def get_follow_target(self, actor: Actor) -> Actor | None:
        """Who *actor* should walk behind, or None if it moves on its own."""
        leader = self.leader
        if leader is None or leader is actor or leader.map != actor.map:
            return None
        return leader
