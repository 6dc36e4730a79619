"""simulation/city_sim.py — Top-level economy orchestrator.

Provides the ``CitySim`` class that owns the grid, the wallet and all
five engines, and exposes a single ``tick()`` for the external clock.

Usage from the dashboard scene::

    sim = CitySim(grid_size=25, wallet=Wallet(coins=5000), rng=random.Random(1))
    sim.place_building(0, buildings["tech_hub"])

    # Each in-game day:
    events = sim.tick(day, weather="stormy", season="winter", infrastructure=40)

    # Player clicks:
    sim.maintain(0)
    sim.start_research("renewable_energy")

Every call returns the events it produced; the same events are queued
on ``sim.bus`` and recorded in ``sim.dev_log``.
"""

from __future__ import annotations
import random
from pathlib import Path
from typing import Any

from components import Building, Wallet, DevLog, NaturalDisaster, TradeRoute, ResearchNode
from components.city import SUNNY
from core.data import CatalogLoader, DATA_DIR
from core.events import (
    EventBus, Notification, ActionRejected, MaintenancePerformed,
    BuildingRepaired, DisasterOccurred, DisasterEnded, TradeStarted,
    GoodsSold, TradeCompleted, ResearchStarted, ResearchCompleted,
)
from simulation.efficiency import BuildingEfficiencyTracker
from simulation.environment import calculate_environmental_impact
from simulation.disasters import DisasterRiskEngine, load_disasters
from simulation.market import TradeMarketSimulator, load_trade_routes
from simulation.research import ResearchGraph, load_research_tree
from simulation.services import CityService, service_effectiveness


_LOG_CATEGORY = {
    MaintenancePerformed: "efficiency",
    BuildingRepaired: "efficiency",
    DisasterOccurred: "disaster",
    DisasterEnded: "disaster",
    TradeStarted: "market",
    GoodsSold: "market",
    TradeCompleted: "market",
    ResearchStarted: "research",
    ResearchCompleted: "research",
    ActionRejected: "rejected",
    Notification: "notify",
}


def load_buildings(path: str | Path | None = None) -> dict[str, Building]:
    """Load the placeable building types (``data/buildings.toml`` by default)."""
    return CatalogLoader(Building).load(path or DATA_DIR / "buildings.toml")


class CitySim:
    """Owns the city's economy state and runs the daily pipeline.

    Daily order: efficiency recompute → disaster rolls → disaster
    pruning → market trends → trade settlement → research check.
    """

    def __init__(self, grid_size: int = 25, wallet: Wallet | None = None,
                 rng: random.Random | None = None,
                 disasters: dict[str, NaturalDisaster] | None = None,
                 routes: dict[str, TradeRoute] | None = None,
                 research: dict[str, ResearchNode] | None = None,
                 effects: Any | None = None,
                 services: list[CityService] | None = None,
                 player_level: int = 1) -> None:
        self.rng = rng or random.Random()
        self.grid: list[Building | None] = [None] * grid_size
        self.wallet = wallet or Wallet()
        self.services = list(services or [])
        self.player_level = player_level

        self.day = 1
        self.weather = SUNNY
        self.season = "spring"
        self.infrastructure = 0

        self.efficiency = BuildingEfficiencyTracker()
        self.disasters = DisasterRiskEngine(
            load_disasters() if disasters is None else disasters, rng=self.rng)
        self.market = TradeMarketSimulator(
            load_trade_routes() if routes is None else routes, rng=self.rng)
        self.research = ResearchGraph(
            load_research_tree() if research is None else research, effects=effects)
        self.environment = calculate_environmental_impact([])

        self.bus = EventBus()
        self.dev_log = DevLog()

    # ── Grid ─────────────────────────────────────────────────────────

    def buildings(self) -> list[Building]:
        return [b for b in self.grid if b is not None]

    def _check_cell(self, index: int) -> None:
        if not 0 <= index < len(self.grid):
            raise IndexError(f"cell {index} outside a {len(self.grid)}-cell grid")

    def place_building(self, index: int, building: Building) -> None:
        """Put *building* on a cell (replacing whatever was there)."""
        self._check_cell(index)
        self.grid[index] = building
        self._grid_changed()

    def remove_building(self, index: int) -> Building | None:
        self._check_cell(index)
        removed = self.grid[index]
        self.grid[index] = None
        self._grid_changed()
        return removed

    def _grid_changed(self) -> None:
        self.environment = calculate_environmental_impact(self.buildings())
        self.efficiency.recompute(self.grid, self.day)

    # ── Daily tick ───────────────────────────────────────────────────

    def tick(self, day: int, weather: str | None = None,
             season: str | None = None,
             infrastructure: float | None = None) -> list:
        """Advance to *day* and run the daily pipeline once."""
        if day < self.day:
            raise ValueError(f"day went backwards ({self.day} -> {day})")
        self.day = day
        if weather is not None:
            self.weather = weather
        if season is not None:
            self.season = season
        if infrastructure is not None:
            self.infrastructure = infrastructure

        events: list = []
        self.efficiency.recompute(self.grid, day)
        events += self.disasters.evaluate(self.buildings(), self.weather,
                                          self.season, self.disaster_protection(), day)
        events += self.disasters.prune(day)
        self.market.recompute_trends()
        events += self.market.settle(day, self.wallet)
        if self.research.is_ready(day):
            events += self.research.complete_research(day)
        return self._publish(events)

    # ── Player actions ───────────────────────────────────────────────

    def maintain(self, index: int) -> list:
        return self._publish(self.efficiency.maintain(index, self.wallet, self.day),
                             index=index)

    def repair(self, index: int) -> list:
        return self._publish(self.efficiency.repair(index, self.wallet, self.day),
                             index=index)

    def buy(self, route_id: str, good_id: str, quantity: int) -> list:
        return self._publish(self.market.buy(route_id, good_id, quantity,
                                             self.wallet, self.day, self.player_level))

    def sell(self, route_id: str, good_id: str, quantity: int) -> list:
        return self._publish(self.market.sell(route_id, good_id, quantity,
                                              self.wallet, self.player_level))

    def start_research(self, node_id: str) -> list:
        return self._publish(self.research.start_research(node_id, self.wallet, self.day))

    def complete_research(self) -> list:
        return self._publish(self.research.complete_research(self.day))

    # ── Events ───────────────────────────────────────────────────────

    def _publish(self, events: list, index: int | None = None) -> list:
        for ev in events:
            cat = _LOG_CATEGORY.get(type(ev), "city")
            msg = getattr(ev, "message", type(ev).__name__)
            self.dev_log.record(self.day, cat, msg, index=index,
                                details=dict(vars(ev)))
        self.bus.emit_all(events)
        return events

    # ── Queries ──────────────────────────────────────────────────────

    def disaster_protection(self) -> float:
        """Infrastructure plus the risk reduction granted by finished research."""
        bonus = getattr(self.research.effects, "disaster_risk_reduction", 0)
        return self.infrastructure + bonus

    def risk_level(self) -> str:
        return self.disasters.risk_level(self.weather, self.season,
                                         self.disaster_protection())

    def snapshot(self) -> dict:
        """Read-only summary of the whole economy for the host UI."""
        return {
            "day": self.day,
            "weather": self.weather,
            "season": self.season,
            "coins": self.wallet.coins,
            "inventory": dict(self.wallet.inventory),
            "efficiency": self.efficiency.efficiency_map(),
            "needs_maintenance": [r.index for r in self.efficiency.needing_maintenance()],
            "environment": self.environment,
            "active_disasters": [a.disaster_id for a in self.disasters.active_disasters()],
            "risk_level": self.risk_level(),
            "market_trends": self.market.market_trends(),
            "trades_in_transit": len(self.market.active_trades),
            "research": self.research.statuses(),
            "research_progress": self.research.progress(self.day),
            "services": service_effectiveness(self.services, self.buildings()),
        }

    def debug_info(self) -> dict:
        return {
            "cells": len(self.grid),
            "buildings": len(self.buildings()),
            "events": self.bus.stats(),
            "pending_events": self.bus.pending_count(),
            "dropped_events": self.bus.dropped,
            "log_entries": len(self.dev_log.entries),
            "log_by_category": self.dev_log.summary(),
        }
