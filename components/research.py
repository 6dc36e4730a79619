"""components.research — Research tree nodes and the research slot."""

from __future__ import annotations
from dataclasses import dataclass, field


TECHNOLOGY = "technology"
ENVIRONMENT = "environment"
SOCIAL = "social"
ECONOMIC = "economic"

CATEGORIES = (TECHNOLOGY, ENVIRONMENT, SOCIAL, ECONOMIC)

# Node statuses
COMPLETED = "completed"
IN_PROGRESS = "in-progress"
AVAILABLE = "available"
LOCKED = "locked"


@dataclass(frozen=True)
class ResearchEffects:
    unlocks_buildings: tuple[str, ...] = ()
    # ({"building_type": "solar_panel", "bonus": 25}, ...); "all" hits every type
    improves_efficiency: tuple[dict, ...] = ()
    reduces_disaster_risk: int = 0
    increases_income: int = 0


@dataclass(frozen=True)
class ResearchNode:
    id: str
    name: str = ""
    description: str = ""
    cost: int = 0
    research_time: int = 1    # days
    prerequisites: tuple[str, ...] = ()
    effects: ResearchEffects = ResearchEffects()
    category: str = TECHNOLOGY


@dataclass(frozen=True)
class ActiveResearch:
    """The single research slot.  ``None`` on the graph when idle."""
    node_id: str
    start_day: int
    duration: int

    def done_on(self) -> int:
        return self.start_day + self.duration


@dataclass
class ResearchBonuses:
    """Default effects collaborator: accumulates what finished research grants.

    Any object with an ``apply(node_id, effects)`` method can stand in.
    """
    unlocked_buildings: set[str] = field(default_factory=set)
    efficiency_bonus: dict[str, int] = field(default_factory=dict)
    disaster_risk_reduction: int = 0
    income_bonus: int = 0
    applied: list[str] = field(default_factory=list)

    def apply(self, node_id: str, effects: ResearchEffects) -> None:
        self.unlocked_buildings.update(effects.unlocks_buildings)
        for entry in effects.improves_efficiency:
            btype = entry.get("building_type", "all")
            self.efficiency_bonus[btype] = (self.efficiency_bonus.get(btype, 0)
                                            + int(entry.get("bonus", 0)))
        self.disaster_risk_reduction += effects.reduces_disaster_risk
        self.income_bonus += effects.increases_income
        self.applied.append(node_id)

    def bonus_for(self, building_id: str) -> int:
        """Efficiency bonus for a building type, including city-wide ("all") bonuses."""
        return self.efficiency_bonus.get(building_id, 0) + self.efficiency_bonus.get("all", 0)
