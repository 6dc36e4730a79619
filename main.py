"""
main.py — Bootstrap for the economy dashboard

1. Load tuning constants
2. Load the building catalog
3. Build a CitySim with a starter grid and wallet
4. Run the pygame dashboard
"""

import random
from core import tuning
from core.app import App
from components import Wallet
from simulation.city_sim import CitySim, load_buildings
from scenes.dashboard_scene import DashboardScene


STARTER_GRID = ["house", "house", "park", "cafe", "tech_hub",
                "factory", "solar_panel", "garden", "charging_station"]

# Goods on hand on day 1, sold from the dashboard with S
STARTER_GOODS = {"food": 20, "materials": 10, "energy": 15}


def starter_wallet(coins: int = 5000) -> Wallet:
    wallet = Wallet(coins=coins)
    for good_id, count in STARTER_GOODS.items():
        wallet.add_goods(good_id, count)
    return wallet


def main(seed: int | None = None):
    tuning.load()
    buildings = load_buildings()

    sim = CitySim(grid_size=25, wallet=starter_wallet(), rng=random.Random(seed))
    for index, building_id in enumerate(STARTER_GRID):
        if building_id in buildings:
            sim.place_building(index, buildings[building_id])

    print(f"[MAIN] City ready: {len(sim.buildings())} buildings, "
          f"{sim.wallet.coins} coins")

    app = App(title="City Economy", width=960, height=640)
    app.run(DashboardScene(sim))


if __name__ == "__main__":
    main()
