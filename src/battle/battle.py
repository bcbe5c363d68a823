"""Battle collaborator - hooks the cast pipeline calls, plus a default battle.

``BattleHooks`` is the contract abilities rely on.  ``Battle`` is the
in-process implementation: two or more sides take turns casting the
strongest ability they can afford until one side is left standing.

Damage numbers are computed by each ability; the battle only applies them
(scaled by the target's effects), keeps statistics, and narrates.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence, TypeVar

from src.core.enums import Domain
from src.engine.locks import EntityLocks, entity_locks
from src.utils.narration import Narrator

if TYPE_CHECKING:
    from src.abilities.base import Ability
    from src.config import SimulationConfig
    from src.core.models import Actor
    from src.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Contract
# ---------------------------------------------------------------------------

class BattleHooks(ABC):
    """What an ability needs from the battle it is cast in.

    Holds the randomness source and the per-target locks; subclasses supply
    the sides and the book-keeping hooks.  Locks default to the process-wide
    ``entity_locks`` so casts from different battles and world-loop steps on
    the same actor take turns.
    """

    def __init__(self, rng: DeterministicRNG, locks: EntityLocks | None = None) -> None:
        self._rng = rng
        self._draws = 0
        self.target_locks = locks if locks is not None else entity_locks

    @property
    def rng(self) -> DeterministicRNG:
        return self._rng

    def next_draw(self) -> int:
        """Monotonic RNG tick so every draw in a battle is distinct."""
        self._draws += 1
        return self._draws

    def pick_one(self, actor: Actor, items: Sequence[T]) -> T:
        """Uniform random pick on behalf of *actor*."""
        idx = self._rng.next_int(Domain.TARGETING, actor.id, self.next_draw(), 0, len(items) - 1)
        return items[idx]

    @abstractmethod
    def enemies_of(self, actor: Actor) -> list[Actor]:
        """Everyone on other sides, alive or not."""

    @abstractmethod
    def allies_of(self, actor: Actor) -> list[Actor]:
        """Everyone on the actor's side including the actor, alive or not."""

    @abstractmethod
    def try_increment_stat(self, actor: Actor, key: str) -> None:
        """Bump a statistic if the actor keeps statistics."""

    @abstractmethod
    def emit_events(self, entity: Actor, hook: str) -> None:
        """Fire a combat hook (``Attack``, ``Attacked``) for an entity."""

    @abstractmethod
    def apply_damage(self, target: Actor, amount: int, source: Actor | None) -> int:
        """Apply *amount* (negative heals). Returns the signed amount actually applied."""

    @abstractmethod
    def handle_death(self, target: Actor, killer: Actor | None) -> None:
        """Book-keeping for a target that just dropped to zero health."""

    @abstractmethod
    def emit_narration(self, text: str) -> None:
        """Publish one line of battle text."""


# ---------------------------------------------------------------------------
# Default implementation
# ---------------------------------------------------------------------------

class Battle(BattleHooks):
    """Turn-based fight between parties of actors."""

    def __init__(
        self,
        config: SimulationConfig,
        rng: DeterministicRNG,
        parties: list[list[Actor]],
        narrator: Narrator | None = None,
        name: str = "battle",
        locks: EntityLocks | None = None,
    ) -> None:
        super().__init__(rng, locks)
        self._config = config
        self.name = name
        self.parties: list[list[Actor]] = [list(p) for p in parties]
        self.narrator = narrator if narrator is not None else Narrator()
        self.round = 0
        self.deaths: list[Actor] = []
        for party in self.parties:
            for actor in party:
                actor.battle = self

    # -- sides --

    def _side_index(self, actor: Actor) -> int:
        for idx, party in enumerate(self.parties):
            if actor in party:
                return idx
        return -1

    def enemies_of(self, actor: Actor) -> list[Actor]:
        side = self._side_index(actor)
        return [a for idx, party in enumerate(self.parties) if idx != side for a in party]

    def allies_of(self, actor: Actor) -> list[Actor]:
        side = self._side_index(actor)
        if side < 0:
            return [actor]
        return list(self.parties[side])

    # -- hooks --

    def try_increment_stat(self, actor: Actor, key: str) -> None:
        if actor.statistics is not None:
            actor.statistics.increment_stat(key)

    def emit_events(self, entity: Actor, hook: str) -> None:
        self.try_increment_stat(entity, f"Combat.Times.{hook}")

    def apply_damage(self, target: Actor, amount: int, source: Actor | None) -> int:
        hp = target.resources["hp"]
        before = hp.current
        if amount > 0:
            scaled = int(round(amount * target.effects.damage_taken_multiplier()))
            hp.sub(scaled)
        else:
            hp.add(-amount)
        return before - hp.current

    def handle_death(self, target: Actor, killer: Actor | None) -> None:
        self.deaths.append(target)
        self.try_increment_stat(target, "Combat.Deaths")
        if killer is not None:
            self.try_increment_stat(killer, "Combat.Kills")
            text = self.narrator.format("%targetName was slain by %player!", killer, {"targetName": target.name})
        else:
            text = f"{target.name} has fallen!"
        self.emit_narration(text)
        logger.debug("%s: %s died (killer=%s)", self.name, target.name, killer.name if killer else None)

    def emit_narration(self, text: str) -> None:
        self.narrator.emit(text, category="battle")

    # -- flow --

    def alive_parties(self) -> list[list[Actor]]:
        return [p for p in self.parties if any(a.alive for a in p)]

    @property
    def is_over(self) -> bool:
        return len(self.alive_parties()) <= 1

    def winning_party(self) -> list[Actor] | None:
        alive = self.alive_parties()
        return alive[0] if len(alive) == 1 else None

    def choose_ability(self, actor: Actor) -> Ability | None:
        """The last usable ability in the actor's list it can pay for."""
        from src.abilities.catalog import create_ability

        for ability_id in reversed(actor.abilities):
            ability = create_ability(ability_id, actor)
            if ability is not None and ability.usable and ability.affordable:
                return ability
        return None

    def take_turn(self, actor: Actor) -> bool:
        """Let *actor* act once. Returns True if it cast something."""
        if not actor.alive or actor.effects.blocks_turn():
            return False
        ability = self.choose_ability(actor)
        if ability is None:
            logger.debug("%s: %s has nothing to cast", self.name, actor.name)
            return False
        ability.pre_cast()
        return True

    def run_round(self) -> None:
        self.round += 1
        order = [a for party in self.parties for a in party]
        for actor in order:
            if self.is_over:
                break
            self.take_turn(actor)
        for actor in order:
            with self.target_locks.hold(actor):
                actor.effects.tick()

    def run(self, max_rounds: int | None = None) -> list[Actor] | None:
        """Fight until one side remains or the round limit is hit."""
        limit = max_rounds if max_rounds is not None else self._config.max_battle_rounds
        self.emit_narration(f"{self.name} begins!")
        while not self.is_over and self.round < limit:
            self.run_round()
        winners = self.winning_party()
        if winners:
            self.emit_narration(f"{', '.join(a.name for a in winners)} won the {self.name}!")
        else:
            self.emit_narration(f"The {self.name} ended in a draw.")
        logger.info("%s finished after %d rounds", self.name, self.round)
        return winners

    def disband(self) -> None:
        """Detach everyone from this battle."""
        for party in self.parties:
            for actor in party:
                if actor.battle is self:
                    actor.battle = None
