"""Movement: direction picking, tile entry gates and tile interactions."""

from src.movement.direction import DIRECTION_DELTAS, direction_delta, direction_weights, pick_direction
from src.movement.dispatcher import TileDispatcher
from src.movement.gates import can_enter

__all__ = [
    "DIRECTION_DELTAS",
    "TileDispatcher",
    "can_enter",
    "direction_delta",
    "direction_weights",
    "pick_direction",
]
