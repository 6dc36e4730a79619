"""test_environment.py — Environmental score and city service coverage.

Run:  python test_environment.py
"""
from __future__ import annotations
import sys, traceback

from core.tuning import load as _load_tuning
_load_tuning()

from components import Building
from simulation.environment import calculate_environmental_impact
from simulation.services import CityService, service_effectiveness


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")


def _b(building_id: str, energy: int = 0) -> Building:
    return Building(id=building_id, name=building_id, energy_usage=energy)


def _close(a: float, b: float) -> bool:
    return abs(a - b) < 1e-9


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 1:  ENVIRONMENT
# ═══════════════════════════════════════════════════════════════════════

def test_empty_city():
    print("\n=== 1: Empty city ===")
    impact = calculate_environmental_impact([])
    assert (impact.pollution, impact.greenery, impact.sustainability) == (0, 0, 0)
    assert impact.effects.health_modifier == 0
    ok("All scores zero")


def test_polluters_and_greenery():
    print("\n=== 2: Polluters and greenery ===")
    impact = calculate_environmental_impact(
        [_b("power_plant"), _b("factory"), _b("park")])
    assert impact.pollution == 25
    assert impact.greenery == 20
    assert impact.sustainability == 0
    assert _close(impact.effects.health_modifier, -0.25)
    assert impact.effects.happiness_modifier == 0
    ok("Pollution 25, greenery 20 -> sustainability 0, health negative")

    impact = calculate_environmental_impact([_b("server_room", energy=60)])
    assert impact.pollution == 3
    impact = calculate_environmental_impact([_b("server_room", energy=50)])
    assert impact.pollution == 0
    ok("Only energy above 50 adds pollution")

    impact = calculate_environmental_impact(
        [_b("park"), _b("garden"), _b("wind_turbine")])
    assert impact.greenery == 43 and impact.sustainability == 43
    assert _close(impact.effects.happiness_modifier, 4.3)
    assert _close(impact.effects.tourism_modifier, 6.45)
    assert _close(impact.effects.health_modifier, 2.15)
    ok("Green city: modifiers scale with sustainability")


def test_caps():
    print("\n=== 3: Caps ===")
    impact = calculate_environmental_impact([_b("park")] * 7)
    assert impact.greenery == 100
    impact = calculate_environmental_impact([_b("power_plant", energy=80)] * 10)
    assert impact.pollution == 100
    for n in range(0, 12):
        city = [_b("park")] * n + [_b("factory", energy=70)] * (11 - n)
        impact = calculate_environmental_impact(city)
        assert 0 <= impact.pollution <= 100
        assert 0 <= impact.greenery <= 100
        assert 0 <= impact.sustainability <= 100
    ok("Scores stay inside [0, 100]")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 2:  SERVICES
# ═══════════════════════════════════════════════════════════════════════

def test_services():
    print("\n=== 4: Services ===")
    city = [_b("house")] * 5
    services = [
        CityService(id="p1", type="police", coverage=10, effectiveness=100),
        CityService(id="f1", type="fire", coverage=1, effectiveness=50),
        CityService(id="h1", type="hospital", coverage=5, effectiveness=80),
    ]
    scores = service_effectiveness(services, city)
    assert _close(scores["safety"], 21.5)
    assert _close(scores["health"], 20.0)
    assert scores["education"] == 0 and scores["transport"] == 0
    ok("Coverage capped at the building count, weighted per type")

    assert service_effectiveness(services, []) == {
        "safety": 0.0, "health": 0.0, "education": 0.0, "transport": 0.0}
    ok("No buildings -> all zero")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Empty city", test_empty_city),
        ("Polluters and greenery", test_polluters_and_greenery),
        ("Caps", test_caps),
        ("Services", test_services),
    ]

    for name, fn in sections:
        try:
            fn()
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    print(f"\n{'=' * 60}")
    print(f"  Environment Tests: {_passed} passed, {_failed} failed")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
