"""components.city — Buildings, weather and the shared wallet."""

from __future__ import annotations
import math
from dataclasses import dataclass, field


# ── Weather ──────────────────────────────────────────────────────────

SUNNY = "sunny"
RAINY = "rainy"
CLOUDY = "cloudy"
STORMY = "stormy"
SNOWY = "snowy"

WEATHER_TYPES = (SUNNY, RAINY, CLOUDY, STORMY, SNOWY)
SEASONS = ("spring", "summer", "autumn", "winter")


# ── Buildings ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Building:
    """A placeable building type.  The grid holds one per occupied cell.

    ``id`` is the building *type* (``"tech_hub"``, ``"park"``...); two
    cells with the same type share the same Building definition.
    """
    id: str
    name: str = ""
    cost: int = 0
    energy_usage: int = 0
    happiness: int = 0
    income: int = 0


# ── Wallet ───────────────────────────────────────────────────────────

@dataclass
class Wallet:
    """Coins and traded goods.  Owned by the host, mutated by the engines.

    Every spend/take is check-then-mutate in one call so an engine never
    leaves the balance half-updated.
    """
    coins: int = 0
    inventory: dict[str, int] = field(default_factory=dict)

    def can_afford(self, amount: int) -> bool:
        return self.coins >= amount

    def spend(self, amount: int) -> bool:
        """Deduct *amount* if affordable.  Returns False and leaves coins alone otherwise."""
        if not self.can_afford(amount):
            return False
        self.coins -= amount
        return True

    def credit(self, amount: int) -> None:
        self.coins += amount

    def quantity_of(self, good_id: str) -> int:
        return self.inventory.get(good_id, 0)

    def add_goods(self, good_id: str, count: int) -> int:
        self.inventory[good_id] = self.inventory.get(good_id, 0) + count
        return count

    def take_goods(self, good_id: str, count: int) -> bool:
        """Remove *count* of a good if all of it is present."""
        have = self.inventory.get(good_id, 0)
        if have < count:
            return False
        self.inventory[good_id] = have - count
        if self.inventory[good_id] <= 0:
            del self.inventory[good_id]
        return True


def round_coins(amount: float) -> int:
    """Round a coin amount half-up (2.5 -> 3), the way prices are quoted."""
    return math.floor(amount + 0.5)
