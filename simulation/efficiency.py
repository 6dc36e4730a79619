"""simulation/efficiency.py — Building decay, maintenance and repair.

Every occupied grid cell carries a ``BuildingEfficiency`` record.  Each
day the efficiency is recomputed from the days elapsed since the last
maintenance::

    efficiency = max(20, 100 - days_since_maintenance * degradation_rate)

Maintenance (10% of the building cost) adds 20 points and restarts the
decay clock.  Repair (30% of the cost) restores full efficiency.
"""

from __future__ import annotations
import math
from dataclasses import replace

from components import Building, BuildingEfficiency, Wallet, round_coins
from core import tuning
from core.events import (
    ValidationError, rejection, Notification, MaintenancePerformed,
    BuildingRepaired, SUCCESS,
)


def _floor() -> float:
    return tuning.get("efficiency", "floor", 20)


def _ceiling() -> float:
    return tuning.get("efficiency", "ceiling", 100)


def clamp_efficiency(value: float) -> float:
    return max(_floor(), min(_ceiling(), value))


def degradation_rate(building_id: str) -> float:
    """Points lost per day without maintenance, by building type."""
    if "tech" in building_id:
        return tuning.get("efficiency.degradation", "tech", 1.5)
    if "park" in building_id or "garden" in building_id:
        return tuning.get("efficiency.degradation", "green", 0.5)
    return tuning.get("efficiency.degradation", "default", 1.0)


def calculate_efficiency(building_id: str, last_maintenance_day: int,
                         current_day: int) -> float:
    """Efficiency of a building type after a stretch without maintenance.

    Rounded half-up to a whole number.

    >>> calculate_efficiency("tech_hub", 1, 11)
    85
    """
    days = current_day - last_maintenance_day
    raw = _ceiling() - days * degradation_rate(building_id)
    return clamp_efficiency(math.floor(raw + 0.5))


def maintenance_cost(building: Building) -> int:
    return round_coins(building.cost * tuning.get("efficiency", "maintenance_cost_fraction", 0.1))


def repair_cost(building: Building) -> int:
    return round_coins(building.cost * tuning.get("efficiency", "repair_cost_fraction", 0.3))


class BuildingEfficiencyTracker:
    """Owns one efficiency record per occupied grid cell.

    The grid itself belongs to the host; the tracker only sees it when
    ``recompute()`` is handed a copy.
    """

    def __init__(self) -> None:
        self.records: dict[int, BuildingEfficiency] = {}

    # ── Daily recompute ──────────────────────────────────────────────

    def recompute(self, grid: list[Building | None],
                  current_day: int) -> dict[int, BuildingEfficiency]:
        """Rebuild every record from the grid.  Returns the new mapping.

        Records for emptied cells are dropped; a cell whose building type
        changed starts a fresh record.
        """
        initial_day = tuning.get("efficiency", "initial_maintenance_day", 1)
        fresh: dict[int, BuildingEfficiency] = {}

        for index, building in enumerate(grid):
            if building is None:
                continue
            existing = self.records.get(index)
            if existing is not None and existing.building_id == building.id:
                last = existing.last_maintenance_day
            else:
                last = initial_day

            fresh[index] = BuildingEfficiency(
                index=index,
                building_id=building.id,
                name=building.name or building.id,
                efficiency=calculate_efficiency(building.id, last, current_day),
                last_maintenance_day=last,
                degradation_rate=degradation_rate(building.id),
                maintenance_cost=maintenance_cost(building),
                repair_cost=repair_cost(building),
            )

        self.records = fresh
        return fresh

    # ── Player actions ───────────────────────────────────────────────

    def _record(self, index: int) -> BuildingEfficiency:
        record = self.records.get(index)
        if record is None:
            raise ValidationError("unknown_building",
                                  f"No building on cell {index}")
        return record

    def maintain(self, index: int, wallet: Wallet,
                 current_day: int) -> list:
        """Pay for maintenance: +20 efficiency and the decay clock restarts."""
        try:
            record = self._record(index)
            if not wallet.spend(record.maintenance_cost):
                raise ValidationError("insufficient_funds",
                                      "Not enough coins for maintenance!")
        except ValidationError as exc:
            return rejection(exc)

        boost = tuning.get("efficiency", "maintenance_boost", 20)
        self.records[index] = replace(
            record,
            efficiency=clamp_efficiency(record.efficiency + boost),
            last_maintenance_day=current_day,
        )
        print(f"[EFFICIENCY] Maintained {record.name} on cell {index} "
              f"({record.efficiency} -> {self.records[index].efficiency})")
        return [
            MaintenancePerformed(index=index, cost=record.maintenance_cost),
            Notification(f"Maintained {record.name} - efficiency increased!",
                         SUCCESS),
        ]

    def repair(self, index: int, wallet: Wallet, current_day: int) -> list:
        """Pay for a full repair: efficiency back to 100."""
        try:
            record = self._record(index)
            if not wallet.spend(record.repair_cost):
                raise ValidationError("insufficient_funds",
                                      "Not enough coins for repairs!")
        except ValidationError as exc:
            return rejection(exc)

        self.records[index] = replace(
            record,
            efficiency=_ceiling(),
            last_maintenance_day=current_day,
        )
        print(f"[EFFICIENCY] Repaired {record.name} on cell {index}")
        return [
            BuildingRepaired(index=index, cost=record.repair_cost),
            Notification(f"Repaired {record.name} - full efficiency restored!",
                         SUCCESS),
        ]

    # ── Queries ──────────────────────────────────────────────────────

    def efficiency_map(self) -> dict[int, float]:
        return {i: r.efficiency for i, r in self.records.items()}

    def get(self, index: int) -> BuildingEfficiency | None:
        return self.records.get(index)

    def needing_maintenance(self) -> list[BuildingEfficiency]:
        """Records below the maintenance threshold, worst first."""
        threshold = tuning.get("efficiency", "needs_maintenance_below", 80)
        low = [r for r in self.records.values() if r.efficiency < threshold]
        return sorted(low, key=lambda r: r.efficiency)
