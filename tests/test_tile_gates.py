"""Tests for tile entry gates."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from src.core.collectibles import CollectibleRecord
from src.core.enums import Terrain
from src.core.tiles import VOID_TILE, Tile, TileObject
from src.movement.gates import can_enter
from tests.helpers.builders import make_actor


def _gated(blocked=False, terrain=Terrain.GRASS, **props):
    return Tile(terrain=terrain, blocked=blocked, object=TileObject("", "Gate", props))


class TestTerrain:

    def test_open_ground(self):
        assert can_enter(make_actor(1), Tile())

    def test_blocked(self):
        assert not can_enter(make_actor(1), Tile(terrain=Terrain.WALL, blocked=True))

    def test_void(self):
        assert not can_enter(make_actor(1), Tile(terrain=Terrain.VOID))
        assert not can_enter(make_actor(1), VOID_TILE)

    def test_object_without_gates(self):
        tile = Tile(object=TileObject("Trainer", "Mage", {"realName": "Merlin"}))
        assert can_enter(make_actor(1), tile)


class TestRequireMap:

    @pytest.mark.parametrize("visits,allowed", [(-1, False), (0, False), (1, True), (12, True)])
    def test_blocked_iff_not_visited(self, visits, allowed):
        actor = make_actor(1)
        actor.statistics.set_stat("Character.Maps.Norkos Dungeon", visits)
        assert can_enter(actor, _gated(requireMap="Norkos Dungeon")) is allowed

    def test_gate_overrides_blocked_flag(self):
        actor = make_actor(1)
        actor.statistics.increment_stat("Character.Maps.Norkos")
        assert can_enter(actor, _gated(blocked=True, requireMap="Norkos"))

    def test_actor_without_statistics(self):
        assert not can_enter(make_actor(1, statistics=None), _gated(requireMap="Norkos"))


class TestOtherGates:

    def test_region(self):
        actor = make_actor(1)
        tile = _gated(requireRegion="Old Mine")
        assert not can_enter(actor, tile)
        actor.statistics.increment_stat("Character.Regions.Old Mine")
        assert can_enter(actor, tile)

    def test_boss(self):
        actor = make_actor(1)
        tile = _gated(requireBoss="Goblin King")
        assert not can_enter(actor, tile)
        actor.statistics.increment_stat("Character.BossKills.Goblin King")
        assert can_enter(actor, tile)

    def test_class(self):
        tile = _gated(requireClass="Mage")
        assert can_enter(make_actor(1, profession_name="Mage"), tile)
        assert not can_enter(make_actor(2, profession_name="Fighter", secondary_professions={"Mage"}), tile)

    def test_achievement(self):
        tile = _gated(requireAchievement="Explorer")
        assert not can_enter(make_actor(1), tile)
        assert can_enter(make_actor(2, achievements={"Explorer"}), tile)

    def test_collectible_via_owner(self):
        owner = make_actor(1)
        owner.collectibles.add(CollectibleRecord("Lucky Clover", "Norkos"))
        pet = make_actor(2, owner=owner)
        assert can_enter(pet, _gated(requireCollectible="Lucky Clover"))
        assert not can_enter(make_actor(3), _gated(requireCollectible="Lucky Clover"))

    def test_first_gate_decides(self):
        actor = make_actor(1, profession_name="Fighter")
        actor.statistics.increment_stat("Character.Maps.Norkos")
        assert can_enter(actor, _gated(requireMap="Norkos", requireClass="Mage"))
