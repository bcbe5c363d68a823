"""Mutable authoritative world state - maps, actors, named locations."""

from __future__ import annotations

from src.core.models import Actor
from src.core.tiles import VOID_TILE, GameMap, TeleportLocation, Tile


class World:
    """The single source of truth for the simulation."""

    __slots__ = ("tick", "maps", "actors", "locations", "_next_actor_id")

    def __init__(
        self,
        maps: list[GameMap] | None = None,
        locations: list[TeleportLocation] | None = None,
    ) -> None:
        self.tick: int = 0
        self.maps: dict[str, GameMap] = {m.name: m for m in maps or []}
        self.actors: dict[int, Actor] = {}
        self.locations: dict[str, TeleportLocation] = {loc.key: loc for loc in locations or []}
        self._next_actor_id: int = 1

    def allocate_actor_id(self) -> int:
        aid = self._next_actor_id
        self._next_actor_id += 1
        return aid

    def add_map(self, game_map: GameMap) -> None:
        self.maps[game_map.name] = game_map

    def add_actor(self, actor: Actor) -> None:
        self.actors[actor.id] = actor
        self._next_actor_id = max(self._next_actor_id, actor.id + 1)

    def remove_actor(self, actor_id: int) -> Actor | None:
        return self.actors.pop(actor_id, None)

    def get_tile(self, map_name: str, x: int, y: int) -> Tile:
        game_map = self.maps.get(map_name)
        if game_map is None:
            return VOID_TILE
        return game_map.tile_at(x, y)

    def location(self, key: str) -> TeleportLocation | None:
        return self.locations.get(key)
