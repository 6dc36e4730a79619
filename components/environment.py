"""components.environment — Derived environmental snapshot."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class EnvironmentalEffects:
    happiness_modifier: float = 0.0
    health_modifier: float = 0.0
    tourism_modifier: float = 0.0


@dataclass(frozen=True)
class EnvironmentalImpact:
    """Pollution and greenery scores for the current building set.

    Recomputed whenever the grid changes; never edited.
    """
    pollution: int = 0
    greenery: int = 0
    sustainability: int = 0
    effects: EnvironmentalEffects = EnvironmentalEffects()
