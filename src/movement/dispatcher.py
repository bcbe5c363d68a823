"""Tile interaction dispatcher - what happens when an actor lands on a tile.

A tile with a ``forceEvent`` property runs that scripted event and nothing
else.  Otherwise the tile object's ``type`` picks a handler from a fixed
table:

  - Trainer      cooldown gated; offers a profession change
  - Teleport     cooldown gated unless forced; moves the actor to another map
  - Collectible  idempotent; records the collectible once

Gated outcomes (cooldown running, personality refuses, already owned) are
silent.  Broken map data is logged at ERROR and the interaction is dropped.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Mapping

from src.core.collectibles import CollectibleRecord
from src.core.enums import TileObjectType
from src.core.models import effective_identity_subject
from src.core.personalities import forbids_movement
from src.engine.emitter import PLAYER_COLLECTIBLE, PLAYER_TRANSFER, EventEmitter, emitter as default_emitter
from src.events.base import EVENT_REGISTRY, ScriptedEvent
from src.events.registry import register_all_events
from src.utils.narration import Narrator

if TYPE_CHECKING:
    from src.config import SimulationConfig
    from src.core.models import Actor
    from src.core.tiles import Tile
    from src.core.world import World

logger = logging.getLogger(__name__)


class TileDispatcher:
    """Routes tile entry to forced events or per-type handlers."""

    __slots__ = ("_config", "_world", "_narrator", "_emitter", "_events", "_handlers", "_unknown_types")

    def __init__(
        self,
        config: SimulationConfig,
        world: World,
        narrator: Narrator | None = None,
        emitter: EventEmitter | None = None,
        events: Mapping[str, ScriptedEvent] | None = None,
    ) -> None:
        self._config = config
        self._world = world
        self._narrator = narrator if narrator is not None else Narrator(clock=lambda: world.tick)
        self._emitter = emitter or default_emitter
        if events is None:
            register_all_events()
            events = EVENT_REGISTRY
        self._events = events
        self._handlers: dict[TileObjectType, Callable[[Actor, Tile, bool], None]] = {
            TileObjectType.TRAINER: self.handle_trainer,
            TileObjectType.TELEPORT: self.handle_teleport,
            TileObjectType.COLLECTIBLE: self.handle_collectible,
        }
        self._unknown_types: set[str] = set()

    @property
    def narrator(self) -> Narrator:
        return self._narrator

    def on_enter_tile(self, actor: Actor, tile: Tile, force: bool = False) -> None:
        """Trigger whatever *tile* does to *actor*. Assumes entry was allowed."""
        if tile.object is None:
            return

        force_event = tile.properties.get("forceEvent", "")
        if force_event:
            event = self._events.get(force_event)
            if event is None:
                logger.error("forceEvent %s does not exist at %d,%d in %s",
                             force_event, actor.x, actor.y, actor.map)
                return
            event.operate_on(actor, self._narrator)
            return

        raw_type = tile.object.type
        if not raw_type:
            return
        try:
            handler = self._handlers[TileObjectType(raw_type)]
        except (ValueError, KeyError):
            if raw_type not in self._unknown_types:
                self._unknown_types.add(raw_type)
                logger.warning("No handler for tile object type %r (first seen in %s)", raw_type, actor.map)
            return
        handler(actor, tile, force)

    # -- handlers --

    def handle_trainer(self, actor: Actor, tile: Tile, force: bool = False) -> None:
        if actor.step_cooldown > 0:
            return
        actor.step_cooldown = self._config.trainer_step_cooldown

        profession = tile.object.name
        real_name = tile.properties.get("realName")
        if real_name:
            trainer_name = f"{real_name}, the {profession} trainer"
        else:
            trainer_name = f"the {profession} trainer"

        event = self._events.get("ProfessionChange")
        if event is None:
            logger.error("ProfessionChange event is not registered; trainer at %d,%d in %s ignored",
                         actor.x, actor.y, actor.map)
            return
        event.operate_on(actor, self._narrator, profession_name=profession, trainer_name=trainer_name)

    def handle_teleport(self, actor: Actor, tile: Tile, force: bool = False) -> None:
        if not force:
            if actor.step_cooldown > 0:
                return
            actor.step_cooldown = self._config.teleport_step_cooldown

        props = tile.properties
        movement_type = props.get("movementType", "")
        if movement_type and forbids_movement(actor, movement_type):
            logger.debug("%s refuses to %s at %d,%d in %s", actor.name, movement_type, actor.x, actor.y, actor.map)
            return

        to_loc = props.get("toLoc")
        dest_map = props.get("map")
        if not dest_map and not to_loc:
            logger.error("No destination map at %d,%d in %s", actor.x, actor.y, actor.map)
            return
        if not movement_type:
            logger.error("No movementType at %d,%d in %s", actor.x, actor.y, actor.map)
            return

        dest: dict[str, Any] = {
            "map": dest_map,
            "movementType": movement_type,
            "fromName": props.get("fromName") or actor.map,
            "destName": props.get("destName") or dest_map,
        }
        if to_loc:
            location = self._world.location(to_loc)
            if location is None:
                logger.error("Unknown toLoc %s at %d,%d in %s", to_loc, actor.x, actor.y, actor.map)
                return
            dest.update(map=location.map, x=location.x, y=location.y, destName=location.formal_name)
        else:
            try:
                dest["x"] = int(props.get("destx"))
                dest["y"] = int(props.get("desty"))
            except (TypeError, ValueError):
                logger.error("Bad destx/desty %r,%r at %d,%d in %s",
                             props.get("destx"), props.get("desty"), actor.x, actor.y, actor.map)
                return

        actor.map = dest["map"]
        actor.x = dest["x"]
        actor.y = dest["y"]

        actor.old_region = actor.map_region
        if dest["map"] in self._world.maps:
            actor.map_region = self._world.get_tile(actor.map, actor.x, actor.y).region
        else:
            actor.map_region = tile.region

        if actor.statistics is not None:
            actor.statistics.increment_stat(f"Character.Movement.{str(movement_type).capitalize()}")

        self._emitter.emit(PLAYER_TRANSFER, {"actor": actor, "dest": dest})

    def handle_collectible(self, actor: Actor, tile: Tile, force: bool = False) -> None:
        collectible = tile.object
        ledger = effective_identity_subject(actor).collectibles
        if ledger.has(collectible.name):
            return

        props = collectible.properties
        record = CollectibleRecord(
            name=collectible.name,
            map=actor.map,
            region=actor.map_region,
            rarity=props.get("rarity") or self._config.default_collectible_rarity,
            description=props.get("flavorText", ""),
            storyline=props.get("storyline", ""),
            found_at=self._world.tick,
        )
        ledger.add(record)
        self._emitter.emit(PLAYER_COLLECTIBLE, {"actor": actor, "collectible": record})
