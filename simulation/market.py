"""simulation/market.py — Price trends and the trade-order lifecycle.

Every day each good gets a fresh trend drawn from about [-0.2, +0.3);
yesterday's trend is thrown away, not smoothed.  Buy orders pay the
base price up front and travel to the destination, where they settle
at ``base_price * demand * (1 + trend)``.  Sells are instant: goods
leave the inventory and the proceeds arrive in the same call.

    market = TradeMarketSimulator(load_trade_routes(), rng=random.Random(3))
    market.buy("rural_town", "food", 10, wallet, day=4, player_level=1)
    market.recompute_trends()
    events = market.settle(day=5, wallet=wallet)
"""

from __future__ import annotations
import random
from pathlib import Path

from components import TradeRoute, TradeGood, ActiveTrade, Wallet, round_coins
from core import tuning
from core.data import CatalogLoader, DATA_DIR
from core.events import (
    ValidationError, rejection, Notification, TradeStarted, TradeCompleted,
    GoodsSold, SUCCESS, WARNING, INFO,
)


_DEFAULT_GATES = {"metropolis": 3, "industrial_zone": 5, "tech_city": 7}


def load_trade_routes(path: str | Path | None = None) -> dict[str, TradeRoute]:
    """Load the route catalog (``data/trade_routes.toml`` by default)."""
    loader = CatalogLoader(TradeRoute)
    loader.register("goods", TradeGood)
    return loader.load(path or DATA_DIR / "trade_routes.toml")


def required_level(route_id: str) -> int:
    """Player level needed to trade on a route; ungated routes need 0."""
    gates = dict(_DEFAULT_GATES)
    gates.update(tuning.section("market.gates"))
    return gates.get(route_id, 0)


def route_unlocked(route_id: str, player_level: int) -> bool:
    return player_level >= required_level(route_id)


def trend_direction(trend: float) -> str:
    if trend > tuning.get("market", "trend_up", 0.1):
        return "up"
    if trend < tuning.get("market", "trend_down", -0.1):
        return "down"
    return "flat"


def relationship_label(relationship: int) -> str:
    if relationship >= 80:
        return "Excellent"
    if relationship >= 60:
        return "Good"
    if relationship >= 40:
        return "Fair"
    return "Poor"


class TradeMarketSimulator:
    """Owns today's market trends and the buy orders in transit."""

    def __init__(self, routes: dict[str, TradeRoute],
                 rng: random.Random | None = None) -> None:
        self.routes = dict(routes)
        self.rng = rng or random.Random()
        self.trends: dict[str, float] = {}
        self.active_trades: list[ActiveTrade] = []

    # ── Trends ───────────────────────────────────────────────────────

    def recompute_trends(self) -> dict[str, float]:
        """Draw a brand-new trend for every good on every route."""
        offset = tuning.get("market", "fluctuation_offset", 0.4)
        scale = tuning.get("market", "fluctuation_scale", 0.5)
        trends: dict[str, float] = {}
        for route in self.routes.values():
            for good in route.goods:
                trends[good.id] = (self.rng.random() - offset) * scale
        self.trends = trends
        return dict(trends)

    def trend(self, good_id: str) -> float:
        return self.trends.get(good_id, 0.0)

    # ── Pricing ──────────────────────────────────────────────────────

    def destination_price(self, good: TradeGood) -> float:
        """What one unit fetches at the destination today."""
        return good.base_price * good.demand * (1 + self.trend(good.id))

    def buy_cost(self, good: TradeGood, quantity: int) -> int:
        return round_coins(good.base_price * quantity)

    def sell_proceeds(self, good: TradeGood, quantity: int) -> int:
        return round_coins(self.destination_price(good) * quantity)

    # ── Lookup / validation ──────────────────────────────────────────

    def available_routes(self, player_level: int) -> list[TradeRoute]:
        return [r for r in self.routes.values()
                if r.is_active and route_unlocked(r.id, player_level)]

    def _resolve(self, route_id: str, good_id: str, quantity: int,
                 player_level: int) -> tuple[TradeRoute, TradeGood]:
        route = self.routes.get(route_id)
        if route is None:
            raise ValidationError("unknown_route", f"Unknown trade route '{route_id}'")
        if not route_unlocked(route_id, player_level):
            raise ValidationError(
                "route_locked",
                f"{route.destination} opens at level {required_level(route_id)}")
        good = route.good(good_id)
        if good is None:
            raise ValidationError("unknown_good",
                                  f"{route.destination} does not trade '{good_id}'")
        if quantity < 1:
            raise ValidationError("invalid_quantity", "Trade quantity must be at least 1")
        return route, good

    # ── Orders ───────────────────────────────────────────────────────

    def buy(self, route_id: str, good_id: str, quantity: int, wallet: Wallet,
            day: int, player_level: int) -> list:
        """Pay for goods now; they settle when the shipment arrives."""
        try:
            route, good = self._resolve(route_id, good_id, quantity, player_level)
            cost = self.buy_cost(good, quantity)
            if not wallet.spend(cost):
                raise ValidationError("insufficient_funds",
                                      "Not enough coins for this trade!")
        except ValidationError as exc:
            return rejection(exc)

        self.active_trades.append(ActiveTrade(route_id=route.id, good_id=good.id,
                                              quantity=quantity, departure_day=day))
        print(f"[MARKET] Day {day}: bought {quantity}x {good.id} for {cost} "
              f"(arrives day {day + route.travel_time})")
        return [
            TradeStarted(route_id=route.id, good_id=good.id,
                         quantity=quantity, cost=cost),
            Notification(f"Trade started! Buying {quantity} {good.name}", INFO),
        ]

    def sell(self, route_id: str, good_id: str, quantity: int, wallet: Wallet,
             player_level: int) -> list:
        """Sell from inventory at today's destination price, immediately."""
        try:
            route, good = self._resolve(route_id, good_id, quantity, player_level)
            if not wallet.take_goods(good.id, quantity):
                raise ValidationError("insufficient_inventory",
                                      "Not enough inventory for this trade!")
        except ValidationError as exc:
            return rejection(exc)

        proceeds = self.sell_proceeds(good, quantity)
        wallet.credit(proceeds)
        print(f"[MARKET] Sold {quantity}x {good.id} on {route.id} for {proceeds}")
        return [
            GoodsSold(route_id=route.id, good_id=good.id,
                      quantity=quantity, proceeds=proceeds),
            Notification(f"Sold {quantity} {good.name} for {proceeds} coins", SUCCESS),
        ]

    # ── Settlement ───────────────────────────────────────────────────

    def settle(self, day: int, wallet: Wallet) -> list:
        """Settle every order that has arrived by *day*.  Each settles once."""
        events: list = []
        in_transit: list[ActiveTrade] = []

        for trade in self.active_trades:
            route = self.routes.get(trade.route_id)
            good = route.good(trade.good_id) if route else None
            if good is None or day < trade.arrives_on(route.travel_time):
                in_transit.append(trade)
                continue

            final_price = self.destination_price(good)
            profit = (final_price - good.base_price) * trade.quantity
            credited = round_coins(final_price * trade.quantity)
            wallet.credit(credited)

            print(f"[MARKET] Day {day}: settled {trade.trade_id} "
                  f"profit={profit:.1f} credited={credited}")
            events.append(TradeCompleted(trade_id=trade.trade_id, profit=profit,
                                         credited=credited))
            events.append(Notification(
                f"Trade completed! Earned {round_coins(profit)} coins from {good.name}",
                SUCCESS if profit > 0 else WARNING))

        self.active_trades = in_transit
        return events

    # ── Queries ──────────────────────────────────────────────────────

    def market_trends(self) -> dict[str, float]:
        return dict(self.trends)

    def in_transit(self) -> list[ActiveTrade]:
        return list(self.active_trades)
