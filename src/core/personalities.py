"""Personality system - toggleable behavioural modifiers.

Personalities are boolean switches on an actor (e.g. Drunk, Delver).  They
never branch the core resolvers directly; instead each definition
contributes typed values that the resolvers aggregate:

  - ``drunk``            scalar summed into the movement drunk factor
  - ``forbids_ascend``   teleports of movement type ``ascend`` are refused
  - ``forbids_descend``  teleports of movement type ``descend`` are refused

Checks always go through the actor's identity subject, so a summoned pet
behaves according to its owner's personalities.

Key types:
  PersonalityDef  - immutable blueprint for one personality
  Personalities   - the active set carried by an actor
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator

from pydantic.dataclasses import dataclass as pydantic_dataclass

from src.core.enums import MovementType

if TYPE_CHECKING:
    from src.core.models import Actor


# ---------------------------------------------------------------------------
# Personality definition
# ---------------------------------------------------------------------------

@pydantic_dataclass(frozen=True)
class PersonalityDef:
    """Immutable blueprint describing one personality's effects."""

    name: str
    description: str
    drunk: float = 0.0              # Contribution to the movement drunk factor
    forbids_ascend: bool = False
    forbids_descend: bool = False


# ---------------------------------------------------------------------------
# Personality registry
# ---------------------------------------------------------------------------

PERSONALITY_DEFS: dict[str, PersonalityDef] = {}


def register_personality(pdef: PersonalityDef) -> PersonalityDef:
    if pdef.name in PERSONALITY_DEFS:
        raise ValueError(f"Personality '{pdef.name}' already registered")
    PERSONALITY_DEFS[pdef.name] = pdef
    return pdef


register_personality(PersonalityDef(
    "Drunk",
    "Stumbles around with little regard for the direction it was heading.",
    drunk=7,
))
register_personality(PersonalityDef(
    "Delver",
    "Never takes a staircase up.",
    forbids_ascend=True,
))
register_personality(PersonalityDef(
    "ScaredOfTheDark",
    "Never takes a staircase down.",
    forbids_descend=True,
))


# ---------------------------------------------------------------------------
# Active set on an actor
# ---------------------------------------------------------------------------

class Personalities:
    """Names of the personalities an actor currently has switched on."""

    __slots__ = ("_active",)

    def __init__(self, active: list[str] | None = None) -> None:
        self._active: set[str] = set(active or [])

    def activate(self, name: str) -> None:
        self._active.add(name)

    def deactivate(self, name: str) -> None:
        self._active.discard(name)

    def is_active(self, name: str) -> bool:
        return name in self._active

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._active))

    def __len__(self) -> int:
        return len(self._active)


# ---------------------------------------------------------------------------
# Queries against an actor
# ---------------------------------------------------------------------------

def is_active(actor: Actor, name: str) -> bool:
    """True if *name* is active on the actor's identity subject."""
    from src.core.models import effective_identity_subject

    return effective_identity_subject(actor).personalities.is_active(name)


def active_defs(actor: Actor) -> list[PersonalityDef]:
    """Definitions of every active, registered personality."""
    from src.core.models import effective_identity_subject

    subject = effective_identity_subject(actor)
    return [PERSONALITY_DEFS[n] for n in subject.personalities if n in PERSONALITY_DEFS]


def drunk_factor(actor: Actor, max_drunk: float = 10) -> float:
    """Sum of drunk contributions, clamped to [0, max_drunk]."""
    total = sum(p.drunk for p in active_defs(actor))
    return max(0.0, min(float(max_drunk), total))


def forbids_movement(actor: Actor, movement_type: str) -> bool:
    """True if an active personality refuses this kind of map transition."""
    for pdef in active_defs(actor):
        if movement_type == MovementType.ASCEND and pdef.forbids_ascend:
            return True
        if movement_type == MovementType.DESCEND and pdef.forbids_descend:
            return True
    return False
