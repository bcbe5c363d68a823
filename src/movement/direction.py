"""Direction picker - weighted numpad-direction choice with momentum.

Directions use numpad codes::

    7 8 9
    4 5 6
    1 2 3

5 means "stay" and is never drawn.  A sober actor strongly prefers to keep
walking the way it was already facing; drunkenness flattens the weights
towards a uniform draw.  Party members that are not leading simply take
the leader's spot and facing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.core.enums import Domain
from src.core.models import Vector2
from src.core.personalities import drunk_factor

if TYPE_CHECKING:
    from src.config import SimulationConfig
    from src.core.models import Actor
    from src.systems.rng import DeterministicRNG

DIRECTION_DELTAS: dict[int, Vector2] = {
    1: Vector2(-1, -1),
    2: Vector2(0, -1),
    3: Vector2(1, -1),
    4: Vector2(-1, 0),
    6: Vector2(1, 0),
    7: Vector2(-1, 1),
    8: Vector2(0, 1),
    9: Vector2(1, 1),
}

MOVE_CODES: tuple[int, ...] = (1, 2, 3, 4, 6, 7, 8, 9)

_ZERO = Vector2(0, 0)


def direction_delta(code: int) -> Vector2:
    """Coordinate delta for a direction code; 5 and unknown codes stay put."""
    return DIRECTION_DELTAS.get(code, _ZERO)


def grid_position(code: int) -> tuple[int, int]:
    """Place of a code in the 3x3 grid, used for direction distances."""
    return code % 3, code // 3


def direction_distance(a: int, b: int) -> int:
    ax, ay = grid_position(a)
    bx, by = grid_position(b)
    return abs(ax - bx) + abs(ay - by)


def direction_weights(last_dir: int, drunk: float, config: SimulationConfig) -> dict[int, float]:
    """Weight per direction code 1-9 (5 included, the draw skips it).

    No previous direction gives every code the base weight.  Otherwise the
    previous direction gets ``straight - penalty * drunk`` and every other
    code ``max(min, turn_base - distance * (1 - drunk / max_drunk))``.
    """
    weights = {code: config.base_direction_weight for code in range(1, 10)}
    if not last_dir:
        return weights

    for code in weights:
        distance = direction_distance(last_dir, code)
        if distance == 0:
            weights[code] = config.straight_weight - config.drunk_straight_penalty * drunk
        else:
            sway = 1 - drunk / config.max_drunk
            weights[code] = max(config.min_direction_weight, config.turn_weight_base - distance * sway)
    return weights


def pick_direction(
    actor: Actor,
    rng: DeterministicRNG,
    tick: int,
    config: SimulationConfig,
    override_follow: bool = False,
) -> tuple[Vector2, int]:
    """Return the destination for *actor*'s next step and the direction used.

    A party follower (unless *override_follow*) goes to the leader's current
    position with the leader's facing.  Everyone else draws a direction.
    """
    if actor.party is not None and not override_follow:
        leader = actor.party.get_follow_target(actor)
        if leader is not None:
            return leader.pos, leader.last_dir

    drunk = drunk_factor(actor, config.max_drunk)
    weights = direction_weights(actor.last_dir, drunk, config)
    code = rng.weighted_choice(
        MOVE_CODES,
        [weights[c] for c in MOVE_CODES],
        Domain.MOVEMENT,
        actor.id,
        tick,
    )
    return actor.pos + direction_delta(code), code
