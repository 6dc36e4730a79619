"""components.trade — Trade routes, goods and orders in transit."""

from __future__ import annotations
from dataclasses import dataclass


RESOURCES = "resources"
GOODS = "goods"
LUXURY = "luxury"
TECHNOLOGY = "technology"


@dataclass(frozen=True)
class TradeGood:
    id: str
    name: str = ""
    base_price: float = 0.0
    demand: float = 1.0       # multiplier on base price at the destination
    supply: int = 0
    category: str = RESOURCES


@dataclass(frozen=True)
class TradeRoute:
    id: str
    destination: str = ""
    goods: tuple[TradeGood, ...] = ()
    relationship: int = 50    # 0..100
    distance: int = 0
    travel_time: int = 1      # days
    is_active: bool = True

    def good(self, good_id: str) -> TradeGood | None:
        for g in self.goods:
            if g.id == good_id:
                return g
        return None


@dataclass(frozen=True)
class ActiveTrade:
    """A buy order in transit.  Settles once, on arrival."""
    route_id: str
    good_id: str
    quantity: int
    departure_day: int

    @property
    def trade_id(self) -> str:
        # Two identical orders placed the same day share this id
        return f"{self.route_id}_{self.good_id}_{self.departure_day}"

    def arrives_on(self, travel_time: int) -> int:
        return self.departure_day + travel_time
