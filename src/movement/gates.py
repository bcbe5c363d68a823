"""Tile entry gates, checked before a step commits.

Gate properties live on the tile object and are checked in a fixed
priority order.  The first gate present on a tile decides entry on its
own; terrain only matters for tiles without any gate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from src.core.enums import Terrain
from src.core.models import effective_identity_subject

if TYPE_CHECKING:
    from src.core.models import Actor
    from src.core.tiles import Tile


def _stat(actor: Actor, key: str) -> float:
    if actor.statistics is None:
        return 0
    return actor.statistics.get_stat(key)


def _require_map(actor: Actor, value: Any) -> bool:
    return _stat(actor, f"Character.Maps.{value}") > 0


def _require_region(actor: Actor, value: Any) -> bool:
    return _stat(actor, f"Character.Regions.{value}") > 0


def _require_boss(actor: Actor, value: Any) -> bool:
    return _stat(actor, f"Character.BossKills.{value}") > 0


def _require_class(actor: Actor, value: Any) -> bool:
    return actor.profession_name == value


def _require_achievement(actor: Actor, value: Any) -> bool:
    return value in actor.achievements


def _require_collectible(actor: Actor, value: Any) -> bool:
    return effective_identity_subject(actor).collectibles.has(value)


# Priority order matters: the first property present wins.
TILE_GATES: tuple[tuple[str, Callable[[Actor, Any], bool]], ...] = (
    ("requireMap", _require_map),
    ("requireRegion", _require_region),
    ("requireBoss", _require_boss),
    ("requireClass", _require_class),
    ("requireAchievement", _require_achievement),
    ("requireCollectible", _require_collectible),
)


def can_enter(actor: Actor, tile: Tile) -> bool:
    """True if *actor* may step onto *tile*."""
    properties = tile.properties
    for prop, gate in TILE_GATES:
        value = properties.get(prop)
        if value:
            return gate(actor, value)
    return not tile.blocked and tile.terrain != Terrain.VOID
