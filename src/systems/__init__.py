"""Engine systems: deterministic RNG."""

from src.systems.rng import DeterministicRNG

__all__ = ["DeterministicRNG"]
