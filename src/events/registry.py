"""Scripted event registration.

Call ``register_all_events()`` once before dispatching forced events.
To add a custom event, either append to this function or call
``register_event()`` directly from your own module.
"""

from __future__ import annotations

from src.events.base import register_event
from src.events.builtin import ProfessionChange, Restoration

_registered = False


def register_all_events() -> None:
    """Register all built-in scripted events (idempotent)."""
    global _registered
    if _registered:
        return
    _registered = True

    register_event(ProfessionChange())
    register_event(Restoration())
