"""simulation/disasters.py — Natural disaster risk model and lifecycle.

Each day every catalog disaster gets one independent roll::

    p = max(0.001, base
                   * (2 if weather in triggers else 1)
                   * seasonal_multiplier.get(season, 1)
                   - infrastructure * 0.001)

Disasters restricted to building types cannot strike a city without
one of those types, and strike half as often where they make up less
than 30% of the city.  Several disasters may be active at once; each
lasts ``recovery_time`` days from the day it struck.

    engine = DisasterRiskEngine(load_disasters(), rng=random.Random(7))
    events = engine.evaluate(buildings, "stormy", "winter", 40, day=12)
    events += engine.prune(day=12)
"""

from __future__ import annotations
import random
from pathlib import Path
from typing import Iterable

from components import Building, NaturalDisaster, DisasterEffects, ActiveDisaster
from components.disaster import MINOR
from core import tuning
from core.data import CatalogLoader, DATA_DIR
from core.events import Notification, DisasterOccurred, DisasterEnded, WARNING, ERROR, INFO


# Building-id fragments that make a city a cyber-attack target
_CYBER_TARGET_MARKERS = ("tech", "smart", "automated")


def load_disasters(path: str | Path | None = None) -> dict[str, NaturalDisaster]:
    """Load the disaster catalog (``data/disasters.toml`` by default)."""
    loader = CatalogLoader(NaturalDisaster)
    loader.register("effects", DisasterEffects)
    return loader.load(path or DATA_DIR / "disasters.toml")


def calculate_probability(disaster: NaturalDisaster, weather: str,
                          season: str, infrastructure: float) -> float:
    """Daily strike chance before any building-mix adjustment.

    A 0.05 base disaster triggered by storms, rolled on a stormy day in
    a city with infrastructure 50: ``0.05 * 2 - 50 * 0.001 = 0.05``.
    """
    probability = disaster.probability

    if weather in disaster.weather_triggers:
        probability *= tuning.get("disasters", "weather_trigger_multiplier", 2.0)

    # 0 / missing both mean "no seasonal effect"
    seasonal = disaster.seasonal_multiplier.get(season)
    if seasonal:
        probability *= seasonal

    reduction = infrastructure * tuning.get("disasters", "infrastructure_factor", 0.001)
    return max(tuning.get("disasters", "min_probability", 0.001),
               probability - reduction)


def risk_level(disasters: Iterable[NaturalDisaster], weather: str,
               season: str, infrastructure: float) -> str:
    """City-wide risk label from the summed daily probabilities."""
    total = sum(calculate_probability(d, weather, season, infrastructure)
                for d in disasters)
    if total > tuning.get("disasters", "risk_high", 0.3):
        return "high"
    if total > tuning.get("disasters", "risk_medium", 0.15):
        return "medium"
    return "low"


def _is_cyber_target(building: Building) -> bool:
    return any(marker in building.id for marker in _CYBER_TARGET_MARKERS)


class DisasterRiskEngine:
    """Rolls for disasters each day and tracks the ones still active."""

    def __init__(self, catalog: dict[str, NaturalDisaster],
                 rng: random.Random | None = None) -> None:
        self.catalog = dict(catalog)
        self.rng = rng or random.Random()
        self.active: list[ActiveDisaster] = []

    # ── Risk model ───────────────────────────────────────────────────

    def strike_probability(self, disaster: NaturalDisaster,
                           buildings: list[Building], weather: str,
                           season: str, infrastructure: float) -> float | None:
        """Chance *disaster* strikes this city today, or None if it cannot."""
        probability = calculate_probability(disaster, weather, season,
                                            infrastructure)
        if not disaster.restricted:
            return probability

        targets = disaster.effects.affected_building_types
        relevant = [b for b in buildings if b.id in targets]
        if not relevant:
            return None

        if disaster.id == "cyber_attack" and not any(_is_cyber_target(b) for b in buildings):
            return None

        if len(relevant) / len(buildings) < tuning.get("disasters", "sparse_ratio", 0.3):
            probability *= tuning.get("disasters", "sparse_multiplier", 0.5)
        return probability

    def evaluate(self, buildings: list[Building], weather: str, season: str,
                 infrastructure: float, day: int) -> list:
        """Roll once for every eligible disaster.  Returns the events."""
        if len(buildings) < tuning.get("disasters", "min_buildings", 3):
            return []
        if day <= tuning.get("disasters", "grace_days", 5):
            return []

        events: list = []
        for disaster in self.catalog.values():
            probability = self.strike_probability(disaster, buildings, weather,
                                                  season, infrastructure)
            if probability is None:
                continue
            if self.rng.random() < probability:
                self.active.append(ActiveDisaster(disaster=disaster, day_occurred=day))
                level = WARNING if disaster.severity == MINOR else ERROR
                print(f"[DISASTER] Day {day}: {disaster.name} "
                      f"({disaster.severity}, p={probability:.3f})")
                events.append(DisasterOccurred(disaster=disaster, day=day))
                events.append(Notification(f"{disaster.name}: {disaster.description}",
                                           level))
        return events

    def prune(self, day: int) -> list:
        """Drop disasters whose recovery time has elapsed."""
        events: list = []
        still_active: list[ActiveDisaster] = []
        for active in self.active:
            if active.recovered(day):
                events.append(DisasterEnded(disaster_id=active.disaster_id, day=day))
                events.append(Notification(f"{active.disaster.name} recovery complete",
                                           INFO))
            else:
                still_active.append(active)
        self.active = still_active
        return events

    # ── Queries ──────────────────────────────────────────────────────

    def active_disasters(self) -> list[ActiveDisaster]:
        return list(self.active)

    def is_active(self, disaster_id: str) -> bool:
        return any(a.disaster_id == disaster_id for a in self.active)

    def risk_level(self, weather: str, season: str,
                   infrastructure: float) -> str:
        return risk_level(self.catalog.values(), weather, season, infrastructure)
