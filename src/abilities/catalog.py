"""Concrete abilities and the id -> class registry.

To add an ability:
  1. Register its tier table in ``src.abilities.definitions``.
  2. Subclass ``Ability`` here with a matching ``ability_id`` and a
     ``pre_cast()`` that builds a ``CastRequest``.
  3. Decorate it with ``@register_ability``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.abilities.base import Ability, CastRequest
from src.core.effects import Bleed, Shield

if TYPE_CHECKING:
    from src.core.models import Actor
    from src.utils.message_format import MessageFormatter

logger = logging.getLogger(__name__)

ABILITY_CLASSES: dict[str, type[Ability]] = {}


def register_ability(cls: type[Ability]) -> type[Ability]:
    if cls.ability_id in ABILITY_CLASSES:
        raise ValueError(f"Ability class for '{cls.ability_id}' already registered")
    ABILITY_CLASSES[cls.ability_id] = cls
    return cls


def create_ability(ability_id: str, caster: Actor, formatter: MessageFormatter | None = None) -> Ability | None:
    cls = ABILITY_CLASSES.get(ability_id)
    if cls is None:
        logger.warning("%s knows unknown ability %r", caster.name, ability_id)
        return None
    return cls(caster, formatter=formatter)


def _stat_range(caster: Actor, stat: str, power: float) -> tuple[int, int]:
    base = caster.stats.get(stat, 0) * power
    return int(base * 0.5), int(base)


@register_ability
class Attack(Ability):
    """Plain weapon hit on one enemy; carries the caster's on-hit effects."""

    ability_id = "attack"

    def calc_damage(self) -> float:
        low, high = _stat_range(self.caster, "str", self.power)
        return self.min_max(low, high)

    def determine_targets(self) -> list[Actor]:
        return self.targeting.single_enemy()

    def pre_cast(self) -> None:
        targets = self.determine_targets()
        self.cast(CastRequest(
            damage=self.calc_damage(),
            targets=targets,
            message="%player attacked %targetName for %damage damage!",
        ))
        if self.caster.combat_effects:
            for target in targets:
                if target.alive:
                    self.apply_combat_effects(self.caster.combat_effects, target)


@register_ability
class Fireball(Ability):
    ability_id = "fireball"

    def calc_damage(self) -> float:
        low, high = _stat_range(self.caster, "int", self.power)
        return self.min_max(low, high)

    def determine_targets(self) -> list[Actor]:
        return self.targeting.single_enemy()

    def pre_cast(self) -> None:
        self.cast(CastRequest(
            damage=self.calc_damage(),
            targets=self.determine_targets(),
            message="%player cast %spellName at %targetName for %damage damage!",
        ))


@register_ability
class Meditate(Ability):
    """Regains mana instead of spending it. Touches nobody else."""

    ability_id = "meditate"

    def pre_cast(self) -> None:
        self.cast(CastRequest(
            damage=0,
            targets=[],
            message="%player used %spellName and regained %regained %stat!",
            template_data={"regained": self.cost, "stat": self.stat},
        ))


@register_ability
class Cure(Ability):
    """Heals the most injured ally; damage is negative."""

    ability_id = "cure"

    def calc_damage(self) -> float:
        low, high = _stat_range(self.caster, "int", self.power)
        return -self.min_max(low, high)

    def determine_targets(self) -> list[Actor]:
        return self.targeting.injured_ally()

    def pre_cast(self) -> None:
        self.cast(CastRequest(
            damage=self.calc_damage(),
            targets=self.determine_targets(),
            message="%player cast %spellName at %targetName and healed %healed hp!",
        ))


@register_ability
class Blessing(Ability):
    """Shields every ally; deals no damage."""

    ability_id = "blessing"

    def calc_duration(self) -> int:
        return 2 + int(self.power)

    def calc_potency(self) -> float:
        return self.power * 2

    def determine_targets(self) -> list[Actor]:
        return self.targeting.all_allies()

    def pre_cast(self) -> None:
        self.cast(CastRequest(
            damage=0,
            targets=self.determine_targets(),
            message="%player cast %spellName on %targetName!",
            effect=Shield,
        ))


@register_ability
class Rend(Ability):
    """A cut that keeps bleeding for a few ticks."""

    ability_id = "rend"

    def calc_damage(self) -> float:
        low, high = _stat_range(self.caster, "str", 1)
        return self.min_max(low, high)

    def calc_duration(self) -> int:
        return 3

    def calc_potency(self) -> float:
        return max(1, int(self.caster.stats.get("str", 0) * self.power * 0.2))

    def determine_targets(self) -> list[Actor]:
        return self.targeting.single_enemy()

    def pre_cast(self) -> None:
        self.cast(CastRequest(
            damage=self.calc_damage(),
            targets=self.determine_targets(),
            message="%player used %spellName on %targetName for %damage damage!",
            effect=Bleed,
        ))
