"""Simulation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration for the simulation run."""

    # World
    world_seed: int = 42
    max_ticks: int = 500

    # Movement weighting (numpad directions 1-9, 5 = stay)
    base_direction_weight: float = 10.0     # Uniform weight when the actor has no previous direction
    straight_weight: float = 40.0           # Weight for continuing in the same direction while sober
    drunk_straight_penalty: float = 3.6     # Straight weight lost per point of drunkenness
    turn_weight_base: float = 4.0           # Weight for a turn before distance is subtracted
    min_direction_weight: float = 1.0       # Floor for any candidate direction
    max_drunk: int = 10

    # Tile interactions
    trainer_step_cooldown: int = 10         # Ticks before a trainer tile triggers again
    teleport_step_cooldown: int = 30        # Ticks before a teleport tile triggers again
    default_collectible_rarity: str = "basic"

    # Battle
    max_battle_rounds: int = 50

    # Logging
    log_level: str = "INFO"
