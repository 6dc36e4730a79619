"""simulation/environment.py — Pollution, greenery and sustainability.

Stateless: the score is a pure function of the building set and is
recomputed whenever the grid changes.
"""

from __future__ import annotations
from typing import Iterable

from components import Building, EnvironmentalImpact, EnvironmentalEffects
from core import tuning


_POLLUTERS = {"power_plant": 15, "factory": 10}
_GREENERY = {"park": 20, "garden": 15, "solar_panel": 5, "wind_turbine": 8}


def calculate_environmental_impact(buildings: Iterable[Building]) -> EnvironmentalImpact:
    pollution = 0
    greenery = 0
    threshold = tuning.get("environment.pollution", "high_energy_threshold", 50)
    high_energy = tuning.get("environment.pollution", "high_energy", 3)

    for b in buildings:
        if b.id in _POLLUTERS:
            pollution += tuning.get("environment.pollution", b.id, _POLLUTERS[b.id])
        if b.energy_usage > threshold:
            pollution += high_energy
        if b.id in _GREENERY:
            greenery += tuning.get("environment.greenery", b.id, _GREENERY[b.id])

    pollution = min(100, pollution)
    greenery = min(100, greenery)
    sustainability = max(0, greenery - pollution)

    return EnvironmentalImpact(
        pollution=pollution,
        greenery=greenery,
        sustainability=sustainability,
        effects=EnvironmentalEffects(
            happiness_modifier=sustainability * tuning.get("environment.effects", "happiness", 0.1),
            # Unlike the other two, health can go negative
            health_modifier=(greenery - pollution) * tuning.get("environment.effects", "health", 0.05),
            tourism_modifier=sustainability * tuning.get("environment.effects", "tourism", 0.15),
        ),
    )
