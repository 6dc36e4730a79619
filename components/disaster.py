"""components.disaster — Natural disaster definitions and active instances.

Definitions come from ``data/disasters.toml`` and are never edited.  An
``ActiveDisaster`` pairs a definition id with the day it struck; it is
dropped once ``day - day_occurred >= recovery_time``.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


MINOR = "minor"
MODERATE = "moderate"
SEVERE = "severe"
CATASTROPHIC = "catastrophic"

SEVERITIES = (MINOR, MODERATE, SEVERE, CATASTROPHIC)


@dataclass(frozen=True)
class DisasterEffects:
    building_damage: int = 0          # percent
    power_outage: bool = False
    water_shortage: bool = False
    coin_loss: int = 0
    # Empty tuple = strikes any city; otherwise only cities with one of these
    affected_building_types: tuple[str, ...] = ()
    duration: int = 0


@dataclass(frozen=True)
class NaturalDisaster:
    id: str
    name: str = ""
    description: str = ""
    probability: float = 0.0
    severity: str = MINOR
    effects: DisasterEffects = DisasterEffects()
    weather_triggers: tuple[str, ...] = ()
    seasonal_multiplier: Mapping[str, float] = field(default_factory=dict)
    prevention_methods: tuple[str, ...] = ()
    recovery_time: int = 1

    def __post_init__(self):
        # Shared by every ActiveDisaster of this type; read-only
        object.__setattr__(self, "seasonal_multiplier",
                           MappingProxyType(dict(self.seasonal_multiplier)))

    @property
    def restricted(self) -> bool:
        return bool(self.effects.affected_building_types)


@dataclass(frozen=True)
class ActiveDisaster:
    disaster: NaturalDisaster
    day_occurred: int

    @property
    def disaster_id(self) -> str:
        return self.disaster.id

    def recovered(self, day: int) -> bool:
        return day - self.day_occurred >= self.disaster.recovery_time

    def days_remaining(self, day: int) -> int:
        return max(0, self.day_occurred + self.disaster.recovery_time - day)
