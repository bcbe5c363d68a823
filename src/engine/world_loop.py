"""WorldLoop - the tick source that drives actors around the world.

Per tick, for every actor in id order:
  1. Effects - tick status effects, drop expired ones
  2. Cooldown - count ``step_cooldown`` down towards 0
  3. Movement - pick a direction, gate entry, commit the step
  4. Interaction - hand the destination tile to the dispatcher

Actors in a battle or without health stand still, and effects on a fighter
are left to its battle.  Each actor is processed under its entity lock,
shared with every battle through ``entity_locks``, so a cast running on
another thread can never interleave with its step.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from src.engine.locks import EntityLocks, entity_locks
from src.movement.direction import pick_direction
from src.movement.gates import can_enter

if TYPE_CHECKING:
    from src.config import SimulationConfig
    from src.core.models import Actor
    from src.core.world import World
    from src.movement.dispatcher import TileDispatcher
    from src.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


class WorldLoop:
    """The heartbeat of the simulation."""

    __slots__ = ("_config", "_world", "_rng", "_dispatcher", "_locks", "_moves", "_blocked")

    def __init__(
        self,
        config: SimulationConfig,
        world: World,
        rng: DeterministicRNG,
        dispatcher: TileDispatcher,
        locks: EntityLocks | None = None,
    ) -> None:
        self._config = config
        self._world = world
        self._rng = rng
        self._dispatcher = dispatcher
        self._locks = locks if locks is not None else entity_locks
        self._moves = 0
        self._blocked = 0

    @property
    def world(self) -> World:
        return self._world

    @property
    def locks(self) -> EntityLocks:
        return self._locks

    def tick_once(self) -> bool:
        """Execute a single tick. Returns False if the simulation should stop."""
        tick = self._world.tick
        if tick >= self._config.max_ticks:
            logger.info("Tick %d: Max ticks reached.", tick)
            return False

        t0 = time.perf_counter()
        for actor_id in sorted(self._world.actors):
            actor = self._world.actors.get(actor_id)
            if actor is None:
                continue
            with self._locks.hold(actor):
                self._step_actor(actor, tick)

        self._world.tick += 1
        logger.debug("Tick %d: %d actors in %.4fs", tick, len(self._world.actors), time.perf_counter() - t0)
        return True

    def run(self, ticks: int | None = None) -> None:
        """Advance *ticks* ticks (default: until ``max_ticks``)."""
        limit = self._config.max_ticks if ticks is None else min(self._config.max_ticks, self._world.tick + ticks)
        logger.info("=== Simulation started (seed=%d, tick=%d) ===", self._rng.seed, self._world.tick)
        while self._world.tick < limit:
            if not self.tick_once():
                break
            if self._world.tick % 50 == 0:
                logger.info("Tick %d: %d steps taken, %d blocked", self._world.tick, self._moves, self._blocked)
        logger.info("=== Simulation paused at tick %d ===", self._world.tick)

    # -- per actor --

    def _step_actor(self, actor: Actor, tick: int) -> None:
        # A battle ticks its own fighters once per round
        if actor.battle is None:
            for effect in actor.effects.tick():
                logger.debug("Tick %d: %s wore off %s", tick, effect.name, actor.name)

        if actor.step_cooldown > 0:
            actor.step_cooldown -= 1

        if not actor.alive or actor.battle is not None:
            return

        dest, direction = pick_direction(actor, self._rng, tick, self._config)
        tile = self._world.get_tile(actor.map, dest.x, dest.y)
        if not can_enter(actor, tile):
            actor.last_dir = 0
            self._blocked += 1
            return

        actor.x = dest.x
        actor.y = dest.y
        actor.last_dir = direction
        if tile.region != actor.map_region:
            actor.old_region = actor.map_region
            actor.map_region = tile.region
        self._moves += 1

        if actor.statistics is not None:
            actor.statistics.increment_stat("Character.Steps")
            actor.statistics.increment_stat(f"Character.Maps.{actor.map}")
            if actor.map_region:
                actor.statistics.increment_stat(f"Character.Regions.{actor.map_region}")

        self._dispatcher.on_enter_tile(actor, tile)
