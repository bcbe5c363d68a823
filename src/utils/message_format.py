"""Narrative template formatting.

Templates use ``%name`` placeholders::

    "%player cast %spellName at %targetName for %damage damage!"

``%player`` is the acting actor's name, pronoun placeholders follow the
actor's gender, and every other placeholder is looked up in the data bag.
Placeholders nobody knows are left as written.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Mapping

from src.core.enums import Gender

if TYPE_CHECKING:
    from src.core.models import Actor

_PLACEHOLDER = re.compile(r"%([A-Za-z]+)")

# placeholder -> (male form, female form)
PRONOUNS: dict[str, tuple[str, str]] = {
    "she": ("he", "she"),
    "he": ("he", "she"),
    "heshe": ("he", "she"),
    "her": ("his", "her"),
    "his": ("his", "her"),
    "hisher": ("his", "her"),
    "himher": ("him", "her"),
}


class MessageFormatter:
    """Substitutes actor and data-bag fields into narrative templates."""

    def format(self, template: str, actor: Actor | None, data: Mapping[str, Any] | None = None) -> str:
        if not template:
            return ""
        data = data or {}

        def _sub(match: re.Match[str]) -> str:
            key = match.group(1)
            if key in data:
                return str(data[key])
            if actor is not None:
                if key.lower() == "player":
                    return actor.name
                forms = PRONOUNS.get(key.lower())
                if forms is not None:
                    word = forms[1] if actor.gender == Gender.FEMALE else forms[0]
                    return word.capitalize() if key[0].isupper() else word
            return match.group(0)

        return _PLACEHOLDER.sub(_sub, template)
