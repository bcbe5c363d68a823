"""Scripted events triggered by tiles and trainers."""

from src.events.base import EVENT_REGISTRY, ScriptedEvent, get_event, register_event
from src.events.registry import register_all_events

__all__ = ["EVENT_REGISTRY", "ScriptedEvent", "get_event", "register_all_events", "register_event"]
