"""simulation/services.py — City service coverage scores.

Police, fire, hospitals, schools and transit each contribute to one
city score, weighted by how well their coverage stretches over the
current building count.
"""

from __future__ import annotations
from dataclasses import dataclass

from components import Building


# service type → (score, weight)
_SERVICE_WEIGHTS = {
    "police": ("safety", 20),
    "fire": ("safety", 15),
    "hospital": ("health", 25),
    "education": ("education", 30),
    "transport": ("transport", 20),
}


@dataclass(frozen=True)
class CityService:
    id: str
    name: str = ""
    type: str = "police"
    coverage: int = 0          # buildings served
    effectiveness: int = 100   # percent
    maintenance_cost: int = 0


def service_effectiveness(services: list[CityService],
                          buildings: list[Building]) -> dict[str, float]:
    scores = {"safety": 0.0, "health": 0.0, "education": 0.0, "transport": 0.0}
    if not buildings:
        return scores

    for service in services:
        if service.type not in _SERVICE_WEIGHTS:
            continue
        score, weight = _SERVICE_WEIGHTS[service.type]
        coverage = min(1.0, service.coverage / len(buildings))
        scores[score] += service.effectiveness / 100 * coverage * weight
    return scores
