"""Abilities: tier tables, targeting, the cast pipeline and the catalogue."""

from src.abilities.base import Ability, CastRequest
from src.abilities.catalog import ABILITY_CLASSES, create_ability
from src.abilities.definitions import ABILITY_DEFS, AbilityDefinition, get_ability_def
from src.abilities.effect_attachment import attach_effect
from src.abilities.targeting import TARGETING_STRATEGIES, TargetingView
from src.abilities.tiers import AbilityTier, resolve_tier

__all__ = [
    "ABILITY_CLASSES",
    "ABILITY_DEFS",
    "Ability",
    "AbilityDefinition",
    "AbilityTier",
    "CastRequest",
    "TARGETING_STRATEGIES",
    "TargetingView",
    "attach_effect",
    "create_ability",
    "get_ability_def",
    "resolve_tier",
]
