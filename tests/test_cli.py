"""Smoke test for the headless demo."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import argparse
import logging

import pytest

from src.__main__ import _run_cli, build_demo_world
from src.movement.gates import can_enter


class TestDemoWorld:

    def test_layout(self):
        world = build_demo_world()
        assert set(world.maps) == {"Norkos", "Norkos Dungeon"}
        assert world.location("norkos-stairs").map == "Norkos"
        hero = world.actors[1]
        assert hero.party is not None and hero.party.leader is hero
        for actor in world.actors.values():
            assert can_enter(actor, world.get_tile(actor.map, actor.x, actor.y))

    @pytest.mark.slow
    def test_cli_runs(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        try:
            _run_cli(argparse.Namespace(seed=7, ticks=60, rounds=20, log_level="WARNING"))
        finally:
            root.handlers[:] = handlers
            root.setLevel(level)
