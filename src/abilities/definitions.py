"""Ability definitions - immutable tier tables owned by a registry.

Every ability id maps to one ``AbilityDefinition``.  Definitions are shared
by all casters; nothing in them changes at runtime.
"""

from __future__ import annotations

from pydantic.dataclasses import dataclass as pydantic_dataclass

from src.abilities.tiers import AbilityTier
from src.core.enums import Element, ResourceOperator


@pydantic_dataclass(frozen=True)
class AbilityDefinition:
    """Immutable ability template."""

    ability_id: str
    element: Element
    tiers: tuple[AbilityTier, ...]
    stat: str = "mp"                                  # Resource the cost is taken from
    oper: ResourceOperator = ResourceOperator.SUB     # ADD for abilities that regain the resource


ABILITY_DEFS: dict[str, AbilityDefinition] = {}


def register_ability_def(adef: AbilityDefinition) -> AbilityDefinition:
    if adef.ability_id in ABILITY_DEFS:
        raise ValueError(f"Ability '{adef.ability_id}' already registered")
    ABILITY_DEFS[adef.ability_id] = adef
    return adef


def get_ability_def(ability_id: str) -> AbilityDefinition:
    try:
        return ABILITY_DEFS[ability_id]
    except KeyError as exc:
        raise KeyError(f"Ability '{ability_id}' is not registered") from exc


def _reg(ability_id: str, element: Element, tiers: list[AbilityTier], **kwargs) -> None:
    register_ability_def(AbilityDefinition(ability_id, element, tuple(tiers), **kwargs))


# ---- Basic attack: every starting profession ----
_reg("attack", Element.PHYSICAL, [
    AbilityTier("attack", "Generalist", 1, cost=0, power=1),
    AbilityTier("attack", "Mage", 1, cost=0, power=1),
    AbilityTier("attack", "Cleric", 1, cost=0, power=1),
    AbilityTier("attack", "Fighter", 1, cost=0, power=1),
    AbilityTier("strike", "Fighter", 10, cost=0, power=1.5),
    AbilityTier("attack", "Pet", 1, cost=0, power=1),
])

# ---- Mage ----
_reg("fireball", Element.FIRE, [
    AbilityTier("Fireball", "Mage", 1, cost=5, power=3),
    AbilityTier("Fireblast", "Mage", 10, cost=10, power=8),
    AbilityTier("Incinerate", "Mage", 25, cost=25, power=15, collectibles=("Phoenix Feather",)),
])
_reg("meditate", Element.BUFF, [
    AbilityTier("Meditate", "Mage", 5, cost=8, power=0),
    AbilityTier("Deep Meditation", "Mage", 20, cost=20, power=0),
], oper=ResourceOperator.ADD)

# ---- Cleric ----
_reg("cure", Element.HEAL, [
    AbilityTier("Cure", "Cleric", 1, cost=5, power=2),
    AbilityTier("Heal", "Cleric", 10, cost=12, power=5),
    AbilityTier("Restore", "Cleric", 25, cost=25, power=10),
])
_reg("blessing", Element.BUFF, [
    AbilityTier("Blessing", "Cleric", 5, cost=10, power=2),
    AbilityTier("Sanctuary", "Cleric", 20, cost=25, power=5),
])

# ---- Fighter ----
_reg("rend", Element.PHYSICAL, [
    AbilityTier("Rend", "Fighter", 5, cost=8, power=1),
    AbilityTier("Lacerate", "Fighter", 15, cost=15, power=2),
])
