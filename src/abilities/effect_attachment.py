"""Effect attachment - turns a cast's effect request into a live effect."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from src.core.effects import EffectOrigin, StatusEffect

if TYPE_CHECKING:
    from src.core.models import Actor


def attach_effect(
    effect_cls: type[StatusEffect],
    target: Actor,
    caster: Actor,
    ability_name: str,
    potency: float,
    duration: int,
    extra: dict[str, Any] | None = None,
) -> StatusEffect:
    """Create *effect_cls* on *target*, stamp its origin and apply it.

    The caller guarantees the target is alive. Once attached the effect is
    owned by the target's effect collection.
    """
    effect = effect_cls(target=target, potency=potency, duration=duration, extra=dict(extra or {}))
    effect.origin = EffectOrigin(name=caster.name, ref=caster, ability=ability_name)
    target.effects.add(effect)
    effect.affect(target)
    return effect
