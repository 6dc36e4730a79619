"""scenes/dashboard_scene.py — Developer dashboard for the city economy.

Text-only view over a ``CitySim``.  The scene is the external clock:
SPACE advances one day, A toggles auto-advance.  Keys:

    SPACE  next day              A   auto-advance on/off
    W      cycle weather         E   cycle season
    M      maintain worst cell   R   repair worst cell
    B      buy 5 of a good       S   sell 5 of that good
    G      next good             L   player level +1
    1-9    start research n      F4  reload tuning.toml
"""

from __future__ import annotations
import pygame

from components import WEATHER_TYPES, SEASONS
from core import tuning
from simulation.city_sim import CitySim
from simulation.market import trend_direction


_LEVEL_COLORS = {
    "success": (120, 220, 140),
    "error": (240, 100, 100),
    "warning": (240, 200, 90),
    "info": (150, 190, 240),
}


class DashboardScene:
    def __init__(self, sim: CitySim, seconds_per_day: float = 1.5):
        self.sim = sim
        self.seconds_per_day = seconds_per_day
        self.auto = False
        self._timer = 0.0
        self._good_cursor = 0

    # ── Clock ────────────────────────────────────────────────────────

    def advance_day(self) -> None:
        self.sim.tick(self.sim.day + 1)
        self.sim.bus.drain()

    def update(self, dt: float, app) -> None:
        if not self.auto:
            return
        self._timer += dt
        if self._timer >= self.seconds_per_day:
            self._timer = 0.0
            self.advance_day()

    # ── Input ────────────────────────────────────────────────────────

    def _tradeable(self) -> list[tuple[str, str]]:
        pairs = []
        for route in self.sim.market.available_routes(self.sim.player_level):
            pairs.extend((route.id, g.id) for g in route.goods)
        return pairs

    def handle_event(self, event, app) -> None:
        if event.type != pygame.KEYDOWN:
            return
        sim = self.sim
        key = event.key

        if key == pygame.K_SPACE:
            self.advance_day()
        elif key == pygame.K_a:
            self.auto = not self.auto
        elif key == pygame.K_w:
            sim.weather = WEATHER_TYPES[(WEATHER_TYPES.index(sim.weather) + 1) % len(WEATHER_TYPES)]
        elif key == pygame.K_e:
            idx = SEASONS.index(sim.season) if sim.season in SEASONS else -1
            sim.season = SEASONS[(idx + 1) % len(SEASONS)]
        elif key in (pygame.K_m, pygame.K_r):
            worst = sim.efficiency.needing_maintenance() or list(sim.efficiency.records.values())
            if worst:
                if key == pygame.K_m:
                    sim.maintain(worst[0].index)
                else:
                    sim.repair(worst[0].index)
        elif key in (pygame.K_b, pygame.K_s):
            pairs = self._tradeable()
            if pairs:
                route_id, good_id = pairs[self._good_cursor % len(pairs)]
                if key == pygame.K_b:
                    sim.buy(route_id, good_id, 5)
                else:
                    sim.sell(route_id, good_id, 5)
        elif key == pygame.K_g:
            self._good_cursor += 1
        elif key == pygame.K_l:
            sim.player_level += 1
        elif key == pygame.K_F4:
            tuning.reload()
        elif pygame.K_1 <= key <= pygame.K_9:
            node_ids = list(sim.research.nodes)
            n = key - pygame.K_1
            if n < len(node_ids):
                sim.start_research(node_ids[n])
        sim.bus.drain()

    # ── Drawing ──────────────────────────────────────────────────────

    def draw(self, surface, app) -> None:
        sim = self.sim
        snap = sim.snapshot()
        y = 10
        header = (f"Day {snap['day']}  coins {snap['coins']}  lvl {sim.player_level}  "
                  f"{snap['weather']}/{snap['season']}  risk {snap['risk_level']}"
                  f"{'  [AUTO]' if self.auto else ''}")
        app.draw_text(surface, header, 10, y, font=app.font_lg)
        y += 30

        # Efficiency column
        app.draw_text(surface, "Buildings", 10, y)
        row = y + 18
        for index, record in sorted(sim.efficiency.records.items()):
            app.draw_text(surface, f"{index:>2} {record.name[:14]:<14} {record.efficiency:>5.0f}",
                          10, row, font=app.font_sm)
            app.draw_bar(surface, 200, row + 3, 100, 7, record.efficiency / 100)
            row += 14

        # Environment + disasters
        env = snap["environment"]
        x = 330
        app.draw_text(surface, "Environment", x, y)
        for i, (label, value, color) in enumerate((
                ("pollution", env.pollution, (220, 90, 90)),
                ("greenery", env.greenery, (90, 200, 110)),
                ("sustain.", env.sustainability, (110, 170, 230)))):
            app.draw_text(surface, f"{label:<10}{value:>4}", x, y + 18 + i * 14, font=app.font_sm)
            app.draw_bar(surface, x + 110, y + 21 + i * 14, 100, 7, value / 100, color)
        dy = y + 70
        app.draw_text(surface, "Active disasters", x, dy)
        for i, active in enumerate(sim.disasters.active_disasters()):
            left = active.days_remaining(sim.day)
            app.draw_text(surface, f"{active.disaster.name} ({left}d)", x, dy + 18 + i * 14,
                          color=(240, 120, 100), font=app.font_sm)

        # Market
        x = 620
        app.draw_text(surface, f"Market ({snap['trades_in_transit']} in transit)", x, y)
        pairs = self._tradeable()
        for i, (route_id, good_id) in enumerate(pairs):
            trend = sim.market.trend(good_id)
            marker = ">" if i == self._good_cursor % max(1, len(pairs)) else " "
            app.draw_text(surface,
                          f"{marker}{good_id:<11}{trend:+.2f} {trend_direction(trend):<4} "
                          f"inv {sim.wallet.quantity_of(good_id)}",
                          x, y + 18 + i * 14, font=app.font_sm)

        # Research
        ry = 330
        app.draw_text(surface, f"Research ({snap['research_progress']:.0f}%)", 620, ry)
        for i, node in enumerate(sim.research.nodes.values()):
            app.draw_text(surface, f"{i + 1} {node.name[:22]:<22} {sim.research.status(node.id)}",
                          620, ry + 18 + i * 14, font=app.font_sm)

        # Notification feed
        fy = 470
        app.draw_text(surface, "Feed", 10, fy)
        for i, entry in enumerate(sim.dev_log.for_cat("notify", 9)):
            level = (entry["details"] or {}).get("level", "info")
            app.draw_text(surface, f"d{entry['day']:<3} {entry['msg']}", 10, fy + 18 + i * 14,
                          color=_LEVEL_COLORS.get(level, (220, 220, 220)), font=app.font_sm)
