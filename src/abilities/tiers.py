"""Ability tiers and the tier resolver.

An ability definition owns an ordered table of tiers.  Table order encodes
ascending strength: the resolver keeps every tier the caster qualifies for
and returns the LAST one, so a stronger tier must appear after the weaker
tiers it supersedes.  The table is never sorted or validated here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from pydantic.dataclasses import dataclass as pydantic_dataclass

from src.core.models import effective_identity_subject

if TYPE_CHECKING:
    from src.core.models import Actor


@pydantic_dataclass(frozen=True)
class AbilityTier:
    """One leveled variant of an ability."""

    name: str
    profession: str
    level: int
    cost: int = 0
    power: float = 0
    collectibles: tuple[str, ...] = ()


def tier_profession_matches(tier: AbilityTier, caster: Actor) -> bool:
    return caster.has_profession(tier.profession)


def tier_collectibles_met(tier: AbilityTier, caster: Actor) -> bool:
    """Every required collectible is held by the caster's identity subject."""
    if not tier.collectibles:
        return True
    subject = effective_identity_subject(caster)
    return all(subject.collectibles.has(c) for c in tier.collectibles)


def tier_applies(tier: AbilityTier, caster: Actor) -> bool:
    return (
        tier_profession_matches(tier, caster)
        and tier.level <= caster.level
        and tier_collectibles_met(tier, caster)
    )


def resolve_tier(tiers: Sequence[AbilityTier], caster: Actor) -> AbilityTier | None:
    """Return the last tier in *tiers* the caster qualifies for, or None."""
    best: AbilityTier | None = None
    for tier in tiers:
        if tier_applies(tier, caster):
            best = tier
    return best
