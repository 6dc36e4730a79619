"""components.efficiency — Per-cell building decay record."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class BuildingEfficiency:
    """Decay state of the building on one grid cell.

    Created the first time the tracker sees an occupied cell, replaced
    by a fresh copy on every recompute, dropped when the cell empties.
    ``efficiency`` is always within [20, 100].
    """
    index: int
    building_id: str
    name: str = ""
    efficiency: float = 100.0
    last_maintenance_day: int = 1
    degradation_rate: float = 1.0
    maintenance_cost: int = 0
    repair_cost: int = 0

    @property
    def id(self) -> str:
        return f"{self.building_id}_{self.index}"
