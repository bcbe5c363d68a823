"""Battle: the hooks abilities call and the default turn-based fight."""

from src.battle.battle import Battle, BattleHooks

__all__ = ["Battle", "BattleHooks"]
