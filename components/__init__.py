"""components — Dataclasses for the city economy, organised by domain.

Submodules
----------
city           Building, Wallet, weather / season names
efficiency     BuildingEfficiency
environment    EnvironmentalImpact, EnvironmentalEffects
disaster       NaturalDisaster, DisasterEffects, ActiveDisaster
trade          TradeRoute, TradeGood, ActiveTrade
research       ResearchNode, ResearchEffects, ActiveResearch, ResearchBonuses
dev_log        DevLog

All public names are re-exported here so engines can do
``from components import Wallet``.
"""

# ── City ─────────────────────────────────────────────────────────────
from components.city import Building, Wallet, WEATHER_TYPES, SEASONS, round_coins

# ── Efficiency ───────────────────────────────────────────────────────
from components.efficiency import BuildingEfficiency

# ── Environment ──────────────────────────────────────────────────────
from components.environment import EnvironmentalImpact, EnvironmentalEffects

# ── Disasters ────────────────────────────────────────────────────────
from components.disaster import NaturalDisaster, DisasterEffects, ActiveDisaster

# ── Trade ────────────────────────────────────────────────────────────
from components.trade import TradeRoute, TradeGood, ActiveTrade

# ── Research ─────────────────────────────────────────────────────────
from components.research import (
    ResearchNode, ResearchEffects, ActiveResearch, ResearchBonuses,
)

# ── Dev tools ────────────────────────────────────────────────────────
from components.dev_log import DevLog

__all__ = [
    # city
    "Building", "Wallet", "WEATHER_TYPES", "SEASONS", "round_coins",
    # efficiency
    "BuildingEfficiency",
    # environment
    "EnvironmentalImpact", "EnvironmentalEffects",
    # disaster
    "NaturalDisaster", "DisasterEffects", "ActiveDisaster",
    # trade
    "TradeRoute", "TradeGood", "ActiveTrade",
    # research
    "ResearchNode", "ResearchEffects", "ActiveResearch", "ResearchBonuses",
    # dev tools
    "DevLog",
]
