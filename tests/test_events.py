"""Tests for scripted events and the event emitter."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from src.core.enums import Gender
from src.engine.emitter import EventEmitter
from src.events import EVENT_REGISTRY, get_event, register_all_events, register_event
from src.events.builtin import ProfessionChange, Restoration
from src.utils.event_log import EventLog
from src.utils.narration import Narrator
from tests.helpers.builders import make_actor


class TestRegistry:

    def test_builtins_registered(self):
        register_all_events()
        register_all_events()
        assert isinstance(get_event("ProfessionChange"), ProfessionChange)
        assert isinstance(get_event("Restoration"), Restoration)

    def test_unknown(self):
        assert get_event("Apocalypse") is None

    def test_duplicate(self):
        register_all_events()
        with pytest.raises(ValueError):
            register_event(Restoration())
        assert "Restoration" in EVENT_REGISTRY


class TestProfessionChange:

    def test_change(self):
        log = EventLog()
        hero = make_actor(1, "Aria", gender=Gender.FEMALE)
        ProfessionChange().operate_on(hero, Narrator(log), profession_name="Cleric")
        assert hero.profession_name == "Cleric"
        assert hero.statistics.get_stat("Character.Trainers.Cleric") == 1
        assert log.messages() == ["Aria met with the Cleric trainer and is now a Cleric!"]
        assert log.latest(1)[0].entity_ids == (1,)

    def test_same_profession(self):
        log = EventLog()
        hero = make_actor(1, "Aria", gender=Gender.FEMALE, profession_name="Cleric")
        ProfessionChange().operate_on(hero, Narrator(log), profession_name="Cleric", trainer_name="Ione")
        assert hero.statistics.get_stat("Character.Trainers.Cleric") == 0
        assert log.messages() == ["Aria met with Ione, but she is already a Cleric."]

    def test_missing_profession(self):
        log = EventLog()
        hero = make_actor(1)
        ProfessionChange().operate_on(hero, Narrator(log))
        assert hero.profession_name == "Generalist"
        assert len(log) == 0


class TestRestoration:

    def test_refills_everything(self):
        hero = make_actor(1, "Aria", gender=Gender.FEMALE)
        hero.resources["hp"].current = 1
        hero.resources["mp"].current = 0
        log = EventLog()
        Restoration().operate_on(hero, Narrator(log))
        assert hero.hp == 100
        assert hero.resources["mp"].current == 50
        assert log.messages() == ["Aria feels refreshed as a warm light washes over her."]


class TestEmitter:

    def test_publish(self):
        em = EventEmitter()
        seen = []
        em.on("player:transfer", seen.append)
        assert em.emit("player:transfer", {"a": 1}) == 1
        assert seen == [{"a": 1}]

    def test_failing_handler_is_isolated(self, caplog):
        em = EventEmitter()
        seen = []

        def boom(payload):
            raise RuntimeError("subscriber broke")

        em.on("player:collectible", boom)
        em.on("player:collectible", seen.append)
        em.emit("player:collectible", {"x": 1})
        assert seen == [{"x": 1}]
        assert "subscriber broke" in caplog.text

    def test_off(self):
        em = EventEmitter()
        seen = []
        em.on("e", seen.append)
        em.off("e", seen.append)
        em.emit("e", {})
        assert seen == []
