"""Engine layer: world loop, event emitter, per-entity locks."""

from src.engine.emitter import EventEmitter, emitter
from src.engine.locks import EntityLocks, entity_locks
from src.engine.world_loop import WorldLoop

__all__ = ["EntityLocks", "EventEmitter", "WorldLoop", "emitter", "entity_locks"]
