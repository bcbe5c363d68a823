"""Base class and registry for scripted events.

ScriptedEvent   - Abstract base class; subclass and implement ``operate_on()``.
EVENT_REGISTRY  - Module-level name -> event mapping used by forced tile events.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from src.core.models import Actor
    from src.utils.narration import Narrator


# ---------------------------------------------------------------------------
# Abstract event
# ---------------------------------------------------------------------------

class ScriptedEvent(ABC):
    """A narrative interaction that happens to one actor.

    Subclass this and implement:
      - name:            unique identifier, as written in ``forceEvent``
      - operate_on(...): mutate the actor and narrate what happened
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique event identifier (e.g. 'ProfessionChange')."""

    @abstractmethod
    def operate_on(self, actor: Actor, narrator: Narrator, **opts: Any) -> None:
        """Run the event for *actor*. Extra options depend on the event."""


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

EVENT_REGISTRY: dict[str, ScriptedEvent] = {}


def register_event(event: ScriptedEvent) -> ScriptedEvent:
    if event.name in EVENT_REGISTRY:
        raise ValueError(f"Scripted event '{event.name}' already registered")
    EVENT_REGISTRY[event.name] = event
    return event


def get_event(name: str) -> ScriptedEvent | None:
    return EVENT_REGISTRY.get(name)
