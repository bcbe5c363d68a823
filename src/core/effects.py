"""Status effect system - timed buffs and debuffs on actors.

Design:
  - An effect is created by a cast against exactly one target and then lives
    in that target's ``EffectCollection``; the cast that created it keeps no
    reference.
  - Each effect carries a potency, a remaining duration (ticks) and an
    origin stamp (who applied it, with which ability).
  - ``affect()`` runs once when attached, ``tick()`` once per game tick and
    ``unaffect()`` once when the duration runs out.
  - New effect kinds subclass ``StatusEffect`` and register themselves in
    ``EFFECT_REGISTRY`` under their lower-case name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from src.core.models import Actor


@dataclass(frozen=True, slots=True)
class EffectOrigin:
    """Provenance of an effect: caster display name, caster, ability name."""

    name: str
    ref: Actor | None = None
    ability: str = ""


@dataclass(slots=True)
class StatusEffect:
    """A timed modifier attached to one target."""

    target: Actor
    potency: float = 0
    duration: int = 0               # -1 = permanent until removed, >0 = timed
    extra: dict[str, Any] = field(default_factory=dict)
    origin: EffectOrigin | None = None

    # Modifier hooks read by the battle (neutral by default)
    damage_taken_mult = 1.0
    blocks_turn = False

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def expired(self) -> bool:
        return self.duration == 0

    def affect(self, target: Actor) -> None:
        """Immediate effect when attached."""

    def unaffect(self, target: Actor) -> None:
        """Clean-up when the effect expires."""

    def tick(self) -> None:
        """Per-tick effect, then decrement remaining duration."""
        self.on_tick(self.target)
        if self.duration > 0:
            self.duration -= 1

    def on_tick(self, target: Actor) -> None:
        pass


class Poison(StatusEffect):
    """Deals potency damage every tick."""

    __slots__ = ()

    def on_tick(self, target: Actor) -> None:
        _hurt(target, int(self.potency), self.origin)


class Bleed(Poison):
    __slots__ = ()


class Regen(StatusEffect):
    """Heals potency every tick."""

    __slots__ = ()

    def on_tick(self, target: Actor) -> None:
        if target.hp > 0:
            target.resources["hp"].add(int(self.potency))


class Shield(StatusEffect):
    """Reduces incoming damage by 5% per potency point, down to a quarter."""

    __slots__ = ()

    @property
    def damage_taken_mult(self) -> float:  # type: ignore[override]
        return max(0.25, 1.0 - 0.05 * self.potency)


class Prone(StatusEffect):
    """The target loses its turns while this is active."""

    __slots__ = ()

    blocks_turn = True


def _hurt(target: Actor, amount: int, origin: EffectOrigin | None) -> None:
    """Damage-over-time routed through the target's battle when it is in one."""
    if amount <= 0 or target.hp <= 0:
        return
    battle = target.battle
    if battle is None:
        target.resources["hp"].sub(amount)
        return
    killer = origin.ref if origin else None
    battle.apply_damage(target, amount, killer)
    if target.hp == 0:
        battle.handle_death(target, killer)


# ---------------------------------------------------------------------------
# Registry - lower-case name -> effect class
# ---------------------------------------------------------------------------

EFFECT_REGISTRY: dict[str, type[StatusEffect]] = {}


def register_effect(cls: type[StatusEffect]) -> type[StatusEffect]:
    key = cls.__name__.lower()
    if key in EFFECT_REGISTRY:
        raise ValueError(f"Effect '{key}' already registered")
    EFFECT_REGISTRY[key] = cls
    return cls


for _cls in (Poison, Bleed, Regen, Shield, Prone):
    register_effect(_cls)


def get_effect_class(name: str) -> type[StatusEffect] | None:
    return EFFECT_REGISTRY.get(name.lower())


# ---------------------------------------------------------------------------
# Collection owned by the target
# ---------------------------------------------------------------------------

class EffectCollection:
    """Effects currently attached to one actor."""

    __slots__ = ("_effects",)

    def __init__(self) -> None:
        self._effects: list[StatusEffect] = []

    def add(self, effect: StatusEffect) -> None:
        self._effects.append(effect)

    def remove(self, effect: StatusEffect) -> None:
        if effect in self._effects:
            self._effects.remove(effect)

    def has(self, name: str) -> bool:
        return any(e.name == name for e in self._effects)

    def tick(self) -> list[StatusEffect]:
        """Tick every effect; detach and return those that expired."""
        expired: list[StatusEffect] = []
        for effect in list(self._effects):
            effect.tick()
            if effect.expired:
                expired.append(effect)
        for effect in expired:
            self._effects.remove(effect)
            effect.unaffect(effect.target)
        return expired

    def damage_taken_multiplier(self) -> float:
        m = 1.0
        for effect in self._effects:
            m *= effect.damage_taken_mult
        return m

    def blocks_turn(self) -> bool:
        return any(e.blocks_turn for e in self._effects)

    def clear(self) -> None:
        self._effects.clear()

    def __iter__(self) -> Iterator[StatusEffect]:
        return iter(list(self._effects))

    def __len__(self) -> int:
        return len(self._effects)
