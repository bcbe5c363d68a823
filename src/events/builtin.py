"""Built-in scripted events."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from src.events.base import ScriptedEvent

if TYPE_CHECKING:
    from src.core.models import Actor
    from src.utils.narration import Narrator

logger = logging.getLogger(__name__)


class ProfessionChange(ScriptedEvent):
    """A trainer teaches the actor a new profession."""

    @property
    def name(self) -> str:
        return "ProfessionChange"

    def operate_on(self, actor: Actor, narrator: Narrator, **opts: Any) -> None:
        profession = opts.get("profession_name", "")
        trainer = opts.get("trainer_name") or f"the {profession} trainer"
        if not profession:
            logger.error("ProfessionChange for %s has no profession at %d,%d in %s",
                         actor.name, actor.x, actor.y, actor.map)
            return
        data = {"trainerName": trainer, "professionName": profession}
        if actor.profession_name == profession:
            narrator.narrate("%player met with %trainerName, but %she is already a %professionName.",
                             actor, data)
            return

        old = actor.profession_name
        actor.profession_name = profession
        if actor.statistics is not None:
            actor.statistics.increment_stat(f"Character.Trainers.{profession}")
        narrator.narrate("%player met with %trainerName and is now a %professionName!", actor, data)
        logger.debug("%s changed profession %s -> %s", actor.name, old, profession)


class Restoration(ScriptedEvent):
    """Every resource pool of the actor is refilled."""

    @property
    def name(self) -> str:
        return "Restoration"

    def operate_on(self, actor: Actor, narrator: Narrator, **opts: Any) -> None:
        for resource in actor.resources.values():
            resource.restore()
        narrator.narrate("%player feels refreshed as a warm light washes over %himher.", actor)
