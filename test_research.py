"""test_research.py — Research prerequisites, the research slot and effects.

Run:  python test_research.py
"""
from __future__ import annotations
import sys, random, traceback

from core.tuning import load as _load_tuning
_load_tuning()

from components import Wallet, ResearchNode, ResearchBonuses
from core.events import ActionRejected, ResearchStarted, ResearchCompleted, was_rejected
from simulation.research import ResearchGraph, load_research_tree, catalog_problems


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")


def _reasons(events) -> list[str]:
    return [e.reason for e in events if isinstance(e, ActionRejected)]


def _graph(effects=None) -> ResearchGraph:
    return ResearchGraph(load_research_tree(), effects=effects)


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 1:  CATALOG
# ═══════════════════════════════════════════════════════════════════════

def test_catalog():
    print("\n=== 1: Catalog ===")
    nodes = load_research_tree()
    assert list(nodes) == ["renewable_energy", "smart_grid",
                           "disaster_preparedness", "urban_planning"]
    assert nodes["smart_grid"].prerequisites == ("renewable_energy",)
    assert nodes["renewable_energy"].effects.improves_efficiency[0]["bonus"] == 25
    assert nodes["smart_grid"].effects.unlocks_buildings == ("smart_grid_controller",)
    assert catalog_problems(nodes) == []
    ok("Four nodes load with a clean prerequisite graph")

    broken = {
        "a": ResearchNode(id="a", prerequisites=("b",)),
        "b": ResearchNode(id="b", prerequisites=("a",)),
        "c": ResearchNode(id="c", prerequisites=("ghost",)),
    }
    problems = catalog_problems(broken)
    assert any("ghost" in p for p in problems)
    assert any(p.startswith("cycle:") for p in problems)
    ok("Unknown prerequisites and cycles are reported")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 2:  STARTING RESEARCH
# ═══════════════════════════════════════════════════════════════════════

def test_unmet_prerequisites():
    print("\n=== 2: Unmet prerequisites ===")
    graph = _graph()
    wallet = Wallet(coins=5000)
    events = graph.start_research("smart_grid", wallet, day=1)
    assert _reasons(events) == ["unmet_prerequisites"]
    assert wallet.coins == 5000 and graph.active is None
    assert graph.status("smart_grid") == "locked"
    ok("Smart grid refused until renewable energy is done")


def test_single_slot():
    print("\n=== 3: Single research slot ===")
    graph = _graph()
    wallet = Wallet(coins=1200)

    events = graph.start_research("renewable_energy", wallet, day=1)
    assert wallet.coins == 200
    assert ResearchStarted(node_id="renewable_energy", cost=1000, day=1) in events
    assert graph.status("renewable_energy") == "in-progress"
    ok("1000-coin research leaves 200 of 1200")

    events = graph.start_research("disaster_preparedness", Wallet(coins=10_000), day=2)
    assert _reasons(events) == ["research_slot_occupied"]
    assert graph.active.node_id == "renewable_energy"
    assert wallet.coins == 200
    ok("Second start rejected while the slot is busy")

    graph = _graph()
    events = graph.start_research("urban_planning", Wallet(coins=1199), day=1)
    assert _reasons(events) == ["insufficient_funds"]
    assert graph.active is None
    ok("One coin short -> rejected")

    assert _reasons(graph.start_research("cold_fusion", Wallet(coins=10_000), 1)) == ["unknown_research"]
    ok("Unknown node rejected")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 3:  COMPLETION
# ═══════════════════════════════════════════════════════════════════════

def test_completion():
    print("\n=== 4: Completion ===")
    bonuses = ResearchBonuses()
    graph = _graph(bonuses)
    wallet = Wallet(coins=10_000)

    assert _reasons(graph.complete_research(1)) == ["no_active_research"]
    ok("Nothing to complete while idle")

    graph.start_research("renewable_energy", wallet, day=1)
    assert graph.progress(3) == 40.0
    assert graph.progress(20) == 100.0
    assert _reasons(graph.complete_research(5)) == ["research_in_progress"]
    assert not graph.is_ready(5) and graph.is_ready(6)
    ok("Progress reported; not done before day 6")

    events = graph.complete_research(6)
    assert graph.completed == ("renewable_energy",)
    assert graph.active is None
    done = [e for e in events if isinstance(e, ResearchCompleted)][0]
    assert done.node_id == "renewable_energy" and done.day == 6
    ok("Completion adds exactly one id and frees the slot")

    assert bonuses.applied == ["renewable_energy"]
    assert bonuses.bonus_for("solar_panel") == 25
    assert bonuses.bonus_for("wind_turbine") == 25
    assert bonuses.bonus_for("house") == 0
    ok("Effects handed to the collaborator")

    assert graph.status("smart_grid") == "available"
    assert _reasons(graph.start_research("renewable_energy", wallet, 7)) == ["already_completed"]
    ok("Dependent node unlocked; finished node can't restart")

    graph.start_research("urban_planning", wallet, day=7)
    graph.complete_research(13)
    assert bonuses.bonus_for("solar_panel") == 35
    assert bonuses.bonus_for("house") == 10
    ok("City-wide bonus stacks on type bonuses")


def test_custom_effects_sink():
    print("\n=== 5: Custom effects sink ===")

    class Recorder:
        def __init__(self):
            self.calls = []

        def apply(self, node_id, effects):
            self.calls.append((node_id, effects.reduces_disaster_risk))

    sink = Recorder()
    graph = _graph(sink)
    graph.start_research("disaster_preparedness", Wallet(coins=800), day=1)
    graph.complete_research(5)
    assert sink.calls == [("disaster_preparedness", 30)]
    ok("Any object with apply() receives completed effects")


# ═══════════════════════════════════════════════════════════════════════
#  SECTION 4:  STATUS AND RANDOM PLAY
# ═══════════════════════════════════════════════════════════════════════

def test_statuses_and_categories():
    print("\n=== 6: Statuses and categories ===")
    graph = _graph()
    assert graph.statuses() == {
        "renewable_energy": "available",
        "smart_grid": "locked",
        "disaster_preparedness": "available",
        "urban_planning": "available",
    }
    assert [n.id for n in graph.nodes_in("social")] == ["disaster_preparedness", "urban_planning"]
    assert len(graph.nodes_in()) == 4
    ok("Initial statuses and category filter")


def test_random_play():
    print("\n=== 7: Random play ===")
    rng = random.Random(42)
    graph = _graph()
    wallet = Wallet(coins=100_000)
    node_ids = list(graph.nodes)

    for day in range(1, 200):
        before = graph.completed
        events = graph.start_research(rng.choice(node_ids), wallet, day)
        if not was_rejected(events):
            node = graph.nodes[graph.active.node_id]
            assert all(graph.is_completed(p) for p in node.prerequisites)
        events = graph.complete_research(day)
        if was_rejected(events):
            assert graph.completed == before
        else:
            assert len(graph.completed) == len(before) + 1
        assert len(set(graph.completed)) == len(graph.completed)
    assert set(graph.completed) == set(node_ids)
    ok("Random play completes every node once, prerequisites first")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Catalog", test_catalog),
        ("Unmet prerequisites", test_unmet_prerequisites),
        ("Single research slot", test_single_slot),
        ("Completion", test_completion),
        ("Custom effects sink", test_custom_effects_sink),
        ("Statuses and categories", test_statuses_and_categories),
        ("Random play", test_random_play),
    ]

    for name, fn in sections:
        try:
            fn()
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name} — unhandled exception:")
            traceback.print_exc()

    print(f"\n{'=' * 60}")
    print(f"  Research Tests: {_passed} passed, {_failed} failed")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
