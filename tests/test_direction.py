"""Tests for weighted direction picking."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from src.config import SimulationConfig
from src.core.models import Party, Vector2
from src.movement.direction import (
    DIRECTION_DELTAS,
    MOVE_CODES,
    direction_delta,
    direction_distance,
    direction_weights,
    pick_direction,
)
from src.systems.rng import DeterministicRNG
from tests.helpers.builders import FixedRNG, make_actor

CFG = SimulationConfig()


class TestWeights:

    def test_uniform_without_history(self):
        weights = direction_weights(0, 0, CFG)
        assert set(weights.values()) == {10.0}
        assert len(weights) == 9

    def test_sober_momentum_east(self):
        weights = direction_weights(6, 0, CFG)
        assert weights[6] == pytest.approx(40)
        assert weights[4] == pytest.approx(2)

    def test_turn_weights_by_distance(self):
        weights = direction_weights(8, 0, CFG)
        assert direction_distance(8, 7) == 1
        assert weights[7] == pytest.approx(3)
        assert weights[2] == pytest.approx(2)
        assert weights[1] == pytest.approx(1)

    def test_straight_weight_falls_with_drunk(self):
        straights = [direction_weights(6, d, CFG)[6] for d in range(0, 11)]
        assert all(a > b for a, b in zip(straights, straights[1:]))

    def test_fully_drunk_is_uniform(self):
        weights = direction_weights(6, 10, CFG)
        moves = {code: weights[code] for code in MOVE_CODES}
        assert all(w == pytest.approx(4) for w in moves.values())

    def test_weights_never_below_floor(self):
        for last in MOVE_CODES:
            for drunk in (0, 3, 7, 10):
                assert min(direction_weights(last, drunk, CFG).values()) >= 1


class TestDeltas:

    def test_table(self):
        assert DIRECTION_DELTAS[1] == Vector2(-1, -1)
        assert DIRECTION_DELTAS[2] == Vector2(0, -1)
        assert DIRECTION_DELTAS[6] == Vector2(1, 0)
        assert DIRECTION_DELTAS[9] == Vector2(1, 1)

    def test_stay_and_unknown(self):
        assert direction_delta(5) == Vector2(0, 0)
        assert direction_delta(42) == Vector2(0, 0)


class TestPickDirection:

    def test_forced_choice_translates_to_destination(self):
        actor = make_actor(1, x=3, y=3)
        dest, code = pick_direction(actor, FixedRNG(choice=7), 0, CFG)
        assert code == 7
        assert dest == Vector2(2, 4)

    def test_stay_never_drawn(self):
        actor = make_actor(1, x=3, y=3)
        rng = DeterministicRNG(123)
        codes = {pick_direction(actor, rng, tick, CFG)[1] for tick in range(300)}
        assert 5 not in codes
        assert codes <= set(MOVE_CODES)

    def test_draw_uses_previous_direction(self):
        actor = make_actor(1, last_dir=6)
        rng = FixedRNG(choice=6)
        pick_direction(actor, rng, 0, CFG)
        items, weights = rng.weight_calls[0]
        assert items == list(MOVE_CODES)
        assert weights[items.index(6)] == pytest.approx(40)

    def test_drunk_personality_flattens(self):
        actor = make_actor(1, last_dir=6)
        actor.personalities.activate("Drunk")
        rng = FixedRNG(choice=6)
        pick_direction(actor, rng, 0, CFG)
        items, weights = rng.weight_calls[0]
        assert weights[items.index(6)] == pytest.approx(40 - 3.6 * 7)

    def test_sober_actor_keeps_heading(self):
        actor = make_actor(1, last_dir=6)
        rng = DeterministicRNG(9)
        same = sum(1 for t in range(400) if pick_direction(actor, rng, t, CFG)[1] == 6)
        assert same > 400 * 0.5

    def test_deterministic(self):
        actor = make_actor(1, last_dir=2)
        a = [pick_direction(actor, DeterministicRNG(5), t, CFG) for t in range(20)]
        b = [pick_direction(actor, DeterministicRNG(5), t, CFG) for t in range(20)]
        assert a == b


class TestFollow:

    def _party(self):
        leader = make_actor(1, "Lead", map="Norkos", x=4, y=4, last_dir=9)
        follower = make_actor(2, "Tag", map="Norkos", x=1, y=1)
        Party("Dawn", [leader, follower])
        return leader, follower

    def test_follower_goes_to_leader(self):
        leader, follower = self._party()
        rng = FixedRNG(choice=1)
        assert pick_direction(follower, rng, 0, CFG) == (Vector2(4, 4), 9)
        assert rng.weight_calls == []

    def test_override_follow(self):
        leader, follower = self._party()
        dest, code = pick_direction(follower, FixedRNG(choice=1), 0, CFG, override_follow=True)
        assert (dest, code) == (Vector2(0, 0), 1)

    def test_leader_draws_normally(self):
        leader, follower = self._party()
        dest, code = pick_direction(leader, FixedRNG(choice=6), 0, CFG)
        assert (dest, code) == (Vector2(5, 4), 6)

    def test_leader_on_other_map(self):
        leader, follower = self._party()
        leader.map = "Norkos Dungeon"
        dest, code = pick_direction(follower, FixedRNG(choice=8), 0, CFG)
        assert (dest, code) == (Vector2(1, 2), 8)
