"""Core data models and world representation."""

from src.core.enums import Domain, Element, MovementType, Terrain, TileObjectType
from src.core.models import Actor, Party, Resource, Vector2, effective_identity_subject
from src.core.tiles import GameMap, TeleportLocation, Tile, TileObject
from src.core.world import World

__all__ = [
    "Actor",
    "Domain",
    "Element",
    "GameMap",
    "MovementType",
    "Party",
    "Resource",
    "TeleportLocation",
    "Terrain",
    "Tile",
    "TileObject",
    "TileObjectType",
    "Vector2",
    "World",
    "effective_identity_subject",
]
