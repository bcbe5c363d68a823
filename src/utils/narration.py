"""Narrator - formats narrative templates and appends them to the event log."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Mapping

from src.utils.event_log import EventLog, SimEvent
from src.utils.message_format import MessageFormatter

if TYPE_CHECKING:
    from src.core.models import Actor


class Narrator:
    """Writes human-readable lines for players to read later.

    *clock* returns the current tick; it is read on every line so the
    narrator can be shared by the world loop and battles.
    """

    __slots__ = ("event_log", "formatter", "_clock")

    def __init__(
        self,
        event_log: EventLog | None = None,
        formatter: MessageFormatter | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.event_log = event_log if event_log is not None else EventLog()
        self.formatter = formatter or MessageFormatter()
        self._clock = clock or (lambda: 0)

    def format(self, template: str, actor: Actor | None, data: Mapping[str, Any] | None = None) -> str:
        return self.formatter.format(template, actor, data)

    def emit(self, text: str, category: str = "event", actors: tuple[Actor, ...] = ()) -> SimEvent | None:
        """Append an already-formatted line. Empty text is dropped."""
        if not text:
            return None
        event = SimEvent(
            tick=self._clock(),
            category=category,
            message=text,
            entity_ids=tuple(a.id for a in actors),
        )
        self.event_log.append(event)
        return event

    def narrate(
        self,
        template: str,
        actor: Actor,
        data: Mapping[str, Any] | None = None,
        category: str = "event",
    ) -> SimEvent | None:
        """Format *template* for *actor* and append it."""
        return self.emit(self.format(template, actor, data), category, (actor,))
