"""Tile / map system."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic.dataclasses import dataclass as pydantic_dataclass

from src.core.enums import Terrain


@pydantic_dataclass(frozen=True)
class TileObject:
    """Something placed on a tile: a trainer, a staircase, a collectible...

    ``properties`` carries free-form gating and destination fields exactly as
    authored in the map data (``requireMap``, ``forceEvent``, ``destx`` ...).
    """

    type: str = ""
    name: str = ""
    properties: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Tile:
    """One cell of a map."""

    terrain: Terrain = Terrain.GRASS
    blocked: bool = False
    object: TileObject | None = None
    region: str = ""

    @property
    def properties(self) -> dict[str, Any]:
        return self.object.properties if self.object else {}


VOID_TILE = Tile(terrain=Terrain.VOID, blocked=True)

# Row-builder legend: character -> (terrain, blocked)
LEGEND: dict[str, tuple[Terrain, bool]] = {
    ".": (Terrain.GRASS, False),
    ",": (Terrain.DIRT, False),
    ":": (Terrain.SAND, False),
    "_": (Terrain.TILE, False),
    "~": (Terrain.WATER, True),
    "#": (Terrain.WALL, True),
    " ": (Terrain.VOID, False),
}


@pydantic_dataclass(frozen=True)
class TeleportLocation:
    """A named destination teleports can refer to with ``toLoc``."""

    key: str
    map: str
    x: int
    y: int
    formal_name: str = ""


class GameMap:
    """2D tile grid backed by a flat list."""

    __slots__ = ("name", "width", "height", "_tiles")

    def __init__(self, name: str, width: int, height: int, default: Tile | None = None) -> None:
        self.name = name
        self.width = width
        self.height = height
        self._tiles: list[Tile] = [default or Tile()] * (width * height)

    def _idx(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            return VOID_TILE
        return self._tiles[self._idx(x, y)]

    def set_tile(self, x: int, y: int, tile: Tile) -> None:
        if self.in_bounds(x, y):
            self._tiles[self._idx(x, y)] = tile

    @classmethod
    def from_rows(
        cls,
        name: str,
        rows: list[str],
        objects: dict[tuple[int, int], TileObject] | None = None,
        regions: dict[tuple[int, int], str] | None = None,
        default_region: str = "",
    ) -> GameMap:
        """Build a map from ASCII rows (see ``LEGEND``) plus placed objects.

        *regions* maps ``(x, y)`` to a region name; unlisted tiles fall in
        *default_region*.
        """
        height = len(rows)
        width = max((len(r) for r in rows), default=0)
        game_map = cls(name, width, height)
        objects = objects or {}
        regions = regions or {}
        for y, row in enumerate(rows):
            for x in range(width):
                ch = row[x] if x < len(row) else " "
                terrain, blocked = LEGEND.get(ch, (Terrain.GRASS, False))
                game_map.set_tile(x, y, Tile(
                    terrain=terrain,
                    blocked=blocked,
                    object=objects.get((x, y)),
                    region=regions.get((x, y), default_region),
                ))
        return game_map
