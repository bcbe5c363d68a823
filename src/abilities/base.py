"""Ability base class and the cast pipeline.

An ``Ability`` binds one caster to one ``AbilityDefinition``.  The tier is
resolved once, when the ability is created, and stays fixed for the rest of
the cast even if the caster's resources change mid-way.

Subclasses implement ``pre_cast()``: pick targets (usually through
``self.targeting``), compute damage, and hand a ``CastRequest`` to
``cast()``.  ``cast()`` then runs the shared pipeline:

  1. statistic tick ``Combat.Utilize.<element>`` for the caster
  2. round damage to an integer
  3. take the tier cost from the caster's resource (or add it, for ADD abilities)
  4. put the tier name into the template data as ``spellName``
  5. no targets → narrate the caster-only message and stop
  6. per target, in order: hooks, damage, narration, death, effect

Preconditions (caller's responsibility): the caster has a resolved tier
(``usable``) and is in a battle.  ``cast()`` logs and aborts without any
side effect if either is missing.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from src.abilities.definitions import AbilityDefinition, get_ability_def
from src.abilities.effect_attachment import attach_effect
from src.abilities.targeting import TargetingView
from src.abilities.tiers import AbilityTier, resolve_tier
from src.core.effects import StatusEffect, get_effect_class
from src.core.enums import Domain, Element, ResourceOperator
from src.utils.message_format import MessageFormatter

if TYPE_CHECKING:
    from src.battle.battle import BattleHooks
    from src.core.models import Actor

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CastRequest:
    """Everything one cast needs. Transient, never stored."""

    damage: float = 0
    targets: list[Actor] = field(default_factory=list)
    message: str = ""
    effect: type[StatusEffect] | None = None
    effect_duration: int | None = None
    effect_potency: float | None = None
    effect_name: str | None = None
    effect_extra: dict[str, Any] | None = None
    template_data: dict[str, Any] = field(default_factory=dict)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class Ability:
    """One caster's handle on one ability definition."""

    ability_id: str = ""

    def __init__(
        self,
        caster: Actor,
        definition: AbilityDefinition | None = None,
        formatter: MessageFormatter | None = None,
    ) -> None:
        self.caster = caster
        self.definition = definition or get_ability_def(self.ability_id)
        self.tier: AbilityTier | None = resolve_tier(self.definition.tiers, caster)
        self.targeting = TargetingView(caster)
        self.formatter = formatter or MessageFormatter()

    @classmethod
    def best_tier(cls, caster: Actor, definition: AbilityDefinition | None = None) -> AbilityTier | None:
        """Tier *caster* would get, without binding an ability instance."""
        adef = definition or get_ability_def(cls.ability_id)
        return resolve_tier(adef.tiers, caster)

    # -- definition shortcuts --

    @property
    def element(self) -> Element:
        return self.definition.element

    @property
    def stat(self) -> str:
        return self.definition.stat

    @property
    def oper(self) -> ResourceOperator:
        return self.definition.oper

    @property
    def cost(self) -> int:
        return self.tier.cost if self.tier else 0

    @property
    def power(self) -> float:
        return self.tier.power if self.tier else 0

    @property
    def name(self) -> str:
        return self.tier.name if self.tier else self.definition.ability_id

    @property
    def usable(self) -> bool:
        return self.tier is not None

    @property
    def affordable(self) -> bool:
        if self.oper == ResourceOperator.ADD:
            return True
        resource = self.caster.resources.get(self.stat)
        return resource is not None and resource.current >= self.cost

    @property
    def battle(self) -> BattleHooks | None:
        return self.caster.battle

    # -- overridable hooks --

    def calc_damage(self) -> float:
        return 0

    def calc_duration(self) -> int:
        return 0

    def calc_potency(self) -> float:
        return 0

    def determine_targets(self) -> list[Actor]:
        return []

    def pre_cast(self) -> None:
        """Choose targets and damage, then call ``cast()``."""

    # -- pipeline --

    def cast(self, request: CastRequest) -> None:
        tier = self.tier
        battle = self.caster.battle
        if tier is None:
            logger.warning("%s has no usable tier of %s; cast aborted", self.caster.name, self.definition.ability_id)
            return
        if battle is None:
            logger.warning("%s cast %s outside of a battle; cast aborted", self.caster.name, tier.name)
            return

        caster = self.caster
        battle.try_increment_stat(caster, f"Combat.Utilize.{self.element.value}")

        damage = round_half_up(request.damage)

        resource = caster.resources.get(self.stat)
        if resource is None:
            logger.warning("%s has no %s pool; %s cost of %d not paid", caster.name, self.stat, tier.name, tier.cost)
        else:
            resource.apply(self.oper.value, tier.cost)

        data = request.template_data
        data["spellName"] = tier.name

        if not request.targets:
            if request.message:
                battle.emit_narration(self.formatter.format(request.message, caster, data))
            return

        for target in request.targets:
            with battle.target_locks.hold(target):
                self._resolve_target(battle, tier, target, damage, request, data)

    def _resolve_target(
        self,
        battle: BattleHooks,
        tier: AbilityTier,
        target: Actor,
        damage: int,
        request: CastRequest,
        data: dict[str, Any],
    ) -> None:
        caster = self.caster
        data["targetName"] = target.name

        battle.emit_events(caster, "Attack")
        battle.emit_events(target, "Attacked")

        was_alive = target.hp > 0
        dealt = damage
        if damage != 0:
            dealt = self.deal_damage(target, damage)

        data["damage"] = f"{dealt:,}"
        data["healed"] = f"{abs(dealt):,}"

        if request.message:
            battle.emit_narration(self.formatter.format(request.message, caster, data))

        # Only a target that was standing before this hit can be reported dead
        if was_alive and target.hp == 0:
            battle.handle_death(target, caster)

        if request.effect is not None and target.hp > 0:
            potency = request.effect_potency if request.effect_potency is not None else self.calc_potency()
            duration = request.effect_duration if request.effect_duration is not None else self.calc_duration()
            attach_effect(
                request.effect,
                target,
                caster,
                request.effect_name or tier.name,
                potency=potency,
                duration=duration,
                extra=request.effect_extra,
            )
            battle.try_increment_stat(caster, f"Combat.Give.Effect.{self.element.value}")
            battle.try_increment_stat(target, f"Combat.Receive.Effect.{self.element.value}")

    # -- helpers for subclasses --

    def deal_damage(self, target: Actor, damage: int) -> int:
        return self.caster.battle.apply_damage(target, damage, self.caster)

    def min_max(self, low: int, high: int) -> int:
        """Random integer in [low, max(low + 1, high)], never below 1."""
        battle = self.caster.battle
        high = max(low + 1, high)
        if battle is None:
            return max(1, low)
        return max(1, battle.rng.next_int(Domain.COMBAT, self.caster.id, battle.next_draw(), low, high))

    def apply_combat_effects(self, effect_names: list[str], target: Actor) -> None:
        """Attach on-hit effects named after caster stats (``prone``, ``poison`` ...).

        Potency is 1 plus the caster's matching stat (negative stats count as 0);
        ``prone`` always lasts a single tick.
        """
        for stat in effect_names:
            effect_cls = get_effect_class(stat)
            if effect_cls is None:
                logger.warning("%s has unknown combat effect %r", self.caster.name, stat)
                continue
            bonus = max(0, self.caster.stats.get(stat, 0))
            self.cast(CastRequest(
                damage=0,
                targets=[target],
                message="",
                effect=effect_cls,
                effect_name=stat,
                effect_potency=1 + bonus,
                effect_duration=1 if stat == "prone" else self.calc_duration(),
            ))
