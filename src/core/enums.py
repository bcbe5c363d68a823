"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    MOVEMENT = 0
    TARGETING = 1
    COMBAT = 2
    EVENT = 3


@unique
class Terrain(str, Enum):
    """Ground kind of a tile."""

    GRASS = "Grass"
    DIRT = "Dirt"
    SAND = "Sand"
    WATER = "Water"
    TILE = "Tile"
    WALL = "Wall"
    VOID = "Void"


@unique
class TileObjectType(str, Enum):
    """Interactive object kinds a tile can carry."""

    TRAINER = "Trainer"
    TELEPORT = "Teleport"
    COLLECTIBLE = "Collectible"


@unique
class MovementType(str, Enum):
    """How a teleport moves an actor between maps."""

    ASCEND = "ascend"
    DESCEND = "descend"
    TELEPORT = "teleport"
    FALL = "fall"
    CLIMB = "climb"


@unique
class Element(str, Enum):
    """Ability element tags, used as statistic key suffixes."""

    PHYSICAL = "Physical"
    BUFF = "Buff"
    DEBUFF = "Debuff"
    HEAL = "Heal"
    DIGITAL = "Digital"
    ENERGY = "Energy"
    HOLY = "Holy"
    THUNDER = "Thunder"
    FIRE = "Fire"
    WATER = "Water"
    ICE = "Ice"


@unique
class ResourceOperator(str, Enum):
    """How an ability's cost is applied to the caster's resource."""

    SUB = "sub"
    ADD = "add"


@unique
class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
