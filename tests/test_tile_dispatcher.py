"""Tests for tile interactions: trainers, teleports, collectibles, forced events."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging

from src.config import SimulationConfig
from src.core.collectibles import CollectibleRecord
from src.core.enums import Terrain
from src.core.tiles import GameMap, TeleportLocation, Tile, TileObject
from src.engine.emitter import PLAYER_COLLECTIBLE, PLAYER_TRANSFER, EventEmitter
from src.movement.dispatcher import TileDispatcher
from src.utils.event_log import EventLog
from src.utils.narration import Narrator
from tests.helpers.builders import make_actor, make_world

CFG = SimulationConfig()


class _Setup:

    def __init__(self, locations=None):
        self.world = make_world()
        dungeon = GameMap.from_rows("Dungeon", ["_____", "_____", "_____"], default_region="Deep Halls")
        self.world.add_map(dungeon)
        for loc in locations or []:
            self.world.locations[loc.key] = loc
        self.log = EventLog()
        self.emitter = EventEmitter()
        self.published: list[tuple[str, dict]] = []
        self.emitter.on(PLAYER_TRANSFER, lambda p: self.published.append((PLAYER_TRANSFER, p)))
        self.emitter.on(PLAYER_COLLECTIBLE, lambda p: self.published.append((PLAYER_COLLECTIBLE, p)))
        self.dispatcher = TileDispatcher(CFG, self.world, Narrator(self.log), self.emitter)
        self.actor = make_actor(1, "Aria", map="Norkos", x=2, y=2, map_region="Fields")


def _tile(obj_type, name="", region="Fields", **props):
    return Tile(object=TileObject(obj_type, name, props), region=region)


class TestCollectible:

    def test_records_and_publishes(self):
        s = _Setup()
        s.world.tick = 77
        tile = _tile("Collectible", "Lucky Clover", rarity="rare", flavorText="Four leaves.", storyline="Norkos")
        s.dispatcher.on_enter_tile(s.actor, tile)
        record = s.actor.collectibles.get("Lucky Clover")
        assert record.map == "Norkos"
        assert record.region == "Fields"
        assert record.rarity == "rare"
        assert record.description == "Four leaves."
        assert record.storyline == "Norkos"
        assert record.found_at == 77
        assert s.published == [(PLAYER_COLLECTIBLE, {"actor": s.actor, "collectible": record})]

    def test_default_rarity(self):
        s = _Setup()
        s.dispatcher.on_enter_tile(s.actor, _tile("Collectible", "Pebble"))
        assert s.actor.collectibles.get("Pebble").rarity == "basic"

    def test_already_owned_is_noop(self):
        s = _Setup()
        original = CollectibleRecord("Lucky Clover", "Elsewhere")
        s.actor.collectibles.add(original)
        s.dispatcher.on_enter_tile(s.actor, _tile("Collectible", "Lucky Clover", rarity="rare"))
        assert len(s.actor.collectibles) == 1
        assert s.actor.collectibles.get("Lucky Clover") is original
        assert s.published == []

    def test_pet_pickup_goes_to_owner(self):
        s = _Setup()
        pet = make_actor(2, "Rex", map="Norkos", x=2, y=2, map_region="Fields", owner=s.actor)
        s.dispatcher.on_enter_tile(pet, _tile("Collectible", "Clover"))
        assert s.actor.collectibles.has("Clover")
        assert not pet.collectibles.has("Clover")
        s.published.clear()
        s.dispatcher.on_enter_tile(pet, _tile("Collectible", "Clover"))
        assert s.published == []

    def test_ignores_cooldown(self):
        s = _Setup()
        s.actor.step_cooldown = 5
        s.dispatcher.on_enter_tile(s.actor, _tile("Collectible", "Pebble"))
        assert s.actor.collectibles.has("Pebble")


class TestTrainer:

    def test_changes_profession_and_sets_cooldown(self):
        s = _Setup()
        s.dispatcher.on_enter_tile(s.actor, _tile("Trainer", "Mage", realName="Merlin"))
        assert s.actor.profession_name == "Mage"
        assert s.actor.step_cooldown == 10
        assert s.actor.statistics.get_stat("Character.Trainers.Mage") == 1
        assert s.log.messages() == ["Aria met with Merlin, the Mage trainer and is now a Mage!"]

    def test_cooldown_blocks(self):
        s = _Setup()
        s.actor.step_cooldown = 1
        s.dispatcher.on_enter_tile(s.actor, _tile("Trainer", "Mage"))
        assert s.actor.profession_name == "Generalist"
        assert s.actor.step_cooldown == 1
        assert len(s.log) == 0

    def test_default_trainer_name(self):
        s = _Setup()
        s.actor.profession_name = "Cleric"
        s.dispatcher.on_enter_tile(s.actor, _tile("Trainer", "Cleric"))
        assert s.log.messages() == ["Aria met with the Cleric trainer, but he is already a Cleric."]
        assert s.actor.step_cooldown == 10


class TestTeleport:

    def _stairs(self, **props):
        base = {"map": "Dungeon", "destx": "3", "desty": "1", "movementType": "descend"}
        base.update(props)
        return _tile("Teleport", "Stairs", region="Fields", **base)

    def test_moves_actor(self):
        s = _Setup()
        tile = self._stairs()
        s.dispatcher.on_enter_tile(s.actor, tile)
        assert (s.actor.map, s.actor.x, s.actor.y) == ("Dungeon", 3, 1)
        assert s.actor.map_region == "Deep Halls"
        assert s.actor.old_region == "Fields"
        assert s.actor.step_cooldown == 30
        assert s.actor.statistics.get_stat("Character.Movement.Descend") == 1
        name, payload = s.published[0]
        assert name == PLAYER_TRANSFER
        assert payload["dest"]["fromName"] == "Norkos"
        assert payload["dest"]["destName"] == "Dungeon"
        assert tile.properties["destx"] == "3"
        assert "x" not in tile.properties

    def test_unloaded_destination_uses_tile_region(self):
        s = _Setup()
        s.dispatcher.on_enter_tile(s.actor, self._stairs(map="Faraway", destName="The Far Away"))
        assert s.actor.map == "Faraway"
        assert s.actor.map_region == "Fields"
        assert s.published[0][1]["dest"]["destName"] == "The Far Away"

    def test_named_location(self):
        s = _Setup([TeleportLocation("norkos-stairs", "Norkos", 5, 5, "Norkos Town")])
        tile = _tile("Teleport", "Stairs Up", toLoc="norkos-stairs", movementType="ascend")
        s.actor.map = "Dungeon"
        s.dispatcher.on_enter_tile(s.actor, tile)
        assert (s.actor.map, s.actor.x, s.actor.y) == ("Norkos", 5, 5)
        assert s.published[0][1]["dest"]["destName"] == "Norkos Town"
        assert s.actor.statistics.get_stat("Character.Movement.Ascend") == 1

    def test_unknown_location_is_logged(self, caplog):
        s = _Setup()
        tile = _tile("Teleport", "Stairs Up", toLoc="nowhere", movementType="ascend")
        with caplog.at_level(logging.ERROR):
            s.dispatcher.on_enter_tile(s.actor, tile)
        assert s.actor.map == "Norkos"
        assert "nowhere" in caplog.text

    def test_cooldown_blocks(self):
        s = _Setup()
        s.actor.step_cooldown = 3
        s.dispatcher.on_enter_tile(s.actor, self._stairs())
        assert s.actor.map == "Norkos"
        assert s.published == []

    def test_force_bypasses_cooldown(self):
        s = _Setup()
        s.actor.step_cooldown = 3
        s.dispatcher.on_enter_tile(s.actor, self._stairs(), force=True)
        assert s.actor.map == "Dungeon"
        assert s.actor.step_cooldown == 3

    def test_personality_refuses_but_cooldown_still_set(self):
        s = _Setup()
        s.actor.personalities.activate("ScaredOfTheDark")
        s.dispatcher.on_enter_tile(s.actor, self._stairs())
        assert s.actor.map == "Norkos"
        assert s.actor.step_cooldown == 30
        assert s.published == []

    def test_delver_refuses_ascend_only(self):
        s = _Setup()
        s.actor.personalities.activate("Delver")
        s.dispatcher.on_enter_tile(s.actor, self._stairs())
        assert s.actor.map == "Dungeon"

    def test_missing_map_logged(self, caplog):
        s = _Setup()
        tile = _tile("Teleport", "Broken", destx=1, desty=1, movementType="fall")
        with caplog.at_level(logging.ERROR):
            s.dispatcher.on_enter_tile(s.actor, tile)
        assert s.actor.map == "Norkos"
        assert "No destination map" in caplog.text

    def test_missing_movement_type_logged(self, caplog):
        s = _Setup()
        tile = _tile("Teleport", "Broken", map="Dungeon", destx=1, desty=1)
        with caplog.at_level(logging.ERROR):
            s.dispatcher.on_enter_tile(s.actor, tile)
        assert s.actor.map == "Norkos"
        assert "movementType" in caplog.text


class TestForcedEvents:

    def test_forced_event_runs_instead_of_type(self):
        s = _Setup()
        s.actor.resources["hp"].current = 10
        tile = _tile("Collectible", "Fountain Coin", forceEvent="Restoration")
        s.dispatcher.on_enter_tile(s.actor, tile)
        assert s.actor.hp == 100
        assert not s.actor.collectibles.has("Fountain Coin")
        assert len(s.log) == 1

    def test_unknown_forced_event(self, caplog):
        s = _Setup()
        with caplog.at_level(logging.ERROR):
            s.dispatcher.on_enter_tile(s.actor, _tile("", "Odd", forceEvent="Apocalypse"))
        assert "Apocalypse" in caplog.text
        assert len(s.log) == 0


class TestUnknownTypes:

    def test_logged_once(self, caplog):
        s = _Setup()
        with caplog.at_level(logging.WARNING):
            for _ in range(3):
                s.dispatcher.on_enter_tile(s.actor, _tile("Shrine", "Old Shrine"))
        assert caplog.text.count("Shrine") == 1

    def test_plain_tiles_do_nothing(self):
        s = _Setup()
        s.dispatcher.on_enter_tile(s.actor, Tile(terrain=Terrain.DIRT))
        s.dispatcher.on_enter_tile(s.actor, Tile(object=TileObject("", "Sign", {})))
        assert s.published == []
        assert len(s.log) == 0
