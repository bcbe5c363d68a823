"""Targeting strategies and the lazy per-caster targeting view.

A strategy maps a caster to the list of actors an ability should hit.  The
view re-runs the strategy on every call against the caster it is bound to,
never a cached snapshot, because targets depend on live battle state (who
is still standing, who is hurt).

To add a strategy:
  1. Write ``def my_strategy(caster: Actor) -> list[Actor]``.
  2. ``register_strategy("my_strategy", my_strategy)``.
  3. Read it with ``view.resolve("my_strategy")``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from src.core.models import Actor

TargetStrategy = Callable[["Actor"], "list[Actor]"]

TARGETING_STRATEGIES: dict[str, TargetStrategy] = {}


def register_strategy(name: str, strategy: TargetStrategy) -> TargetStrategy:
    if name in TARGETING_STRATEGIES:
        raise ValueError(f"Targeting strategy '{name}' already registered")
    TARGETING_STRATEGIES[name] = strategy
    return strategy


# ---------------------------------------------------------------------------
# Built-in strategies
# ---------------------------------------------------------------------------

def _enemies(caster: Actor) -> list[Actor]:
    if caster.battle is None:
        return []
    return [a for a in caster.battle.enemies_of(caster) if a.alive]


def _allies(caster: Actor) -> list[Actor]:
    if caster.battle is None:
        return [caster] if caster.alive else []
    return [a for a in caster.battle.allies_of(caster) if a.alive]


def _pick_one(caster: Actor, candidates: list[Actor]) -> list[Actor]:
    if not candidates:
        return []
    if caster.battle is None or len(candidates) == 1:
        return [candidates[0]]
    return [caster.battle.pick_one(caster, candidates)]


def target_self(caster: Actor) -> list[Actor]:
    return [caster]


def target_single_enemy(caster: Actor) -> list[Actor]:
    return _pick_one(caster, _enemies(caster))


def target_all_enemies(caster: Actor) -> list[Actor]:
    return _enemies(caster)


def target_single_ally(caster: Actor) -> list[Actor]:
    return _pick_one(caster, _allies(caster))


def target_all_allies(caster: Actor) -> list[Actor]:
    return _allies(caster)


def target_injured_ally(caster: Actor) -> list[Actor]:
    """The living ally with the lowest health ratio, if anyone is hurt."""
    hurt = [a for a in _allies(caster) if a.resources["hp"].ratio < 1.0]
    if not hurt:
        return []
    return [min(hurt, key=lambda a: (a.resources["hp"].ratio, a.id))]


def target_party(caster: Actor) -> list[Actor]:
    """Living members of the caster's travelling party (just the caster if solo)."""
    if caster.party is None:
        return [caster] if caster.alive else []
    return [m for m in caster.party.members if m.alive]


register_strategy("self", target_self)
register_strategy("single_enemy", target_single_enemy)
register_strategy("all_enemies", target_all_enemies)
register_strategy("single_ally", target_single_ally)
register_strategy("all_allies", target_all_allies)
register_strategy("injured_ally", target_injured_ally)
register_strategy("party", target_party)


# ---------------------------------------------------------------------------
# View bound to one caster
# ---------------------------------------------------------------------------

class TargetingView:
    """Named accessors over the strategy registry for one caster."""

    __slots__ = ("_caster",)

    def __init__(self, caster: Actor) -> None:
        self._caster = caster

    def resolve(self, name: str) -> list[Actor]:
        strategy = TARGETING_STRATEGIES.get(name)
        if strategy is None:
            raise KeyError(f"Unknown targeting strategy '{name}'")
        return strategy(self._caster)

    def myself(self) -> list[Actor]:
        return self.resolve("self")

    def single_enemy(self) -> list[Actor]:
        return self.resolve("single_enemy")

    def all_enemies(self) -> list[Actor]:
        return self.resolve("all_enemies")

    def single_ally(self) -> list[Actor]:
        return self.resolve("single_ally")

    def all_allies(self) -> list[Actor]:
        return self.resolve("all_allies")

    def injured_ally(self) -> list[Actor]:
        return self.resolve("injured_ally")

    def party(self) -> list[Actor]:
        return self.resolve("party")
