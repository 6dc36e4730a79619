"""simulation/research.py — Research prerequisite graph and the research slot.

Nodes form a DAG through their ``prerequisites``.  A node is available
once every prerequisite is completed and it is not completed itself.
Only one node can be researched at a time; it finishes
``research_time`` days after it started and its effects are handed to
an effects collaborator (``ResearchBonuses`` unless the host supplies
its own).  There is no cancel.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

from components import ResearchNode, ResearchEffects, ActiveResearch, ResearchBonuses, Wallet
from components.research import COMPLETED, IN_PROGRESS, AVAILABLE, LOCKED
from core.data import CatalogLoader, DATA_DIR
from core.events import (
    ValidationError, rejection, Notification, ResearchStarted,
    ResearchCompleted, SUCCESS, INFO,
)


def load_research_tree(path: str | Path | None = None) -> dict[str, ResearchNode]:
    """Load the research catalog (``data/research.toml`` by default)."""
    loader = CatalogLoader(ResearchNode)
    loader.register("effects", ResearchEffects)
    return loader.load(path or DATA_DIR / "research.toml")


def catalog_problems(nodes: dict[str, ResearchNode]) -> list[str]:
    """Authoring check: unknown prerequisites and prerequisite cycles."""
    problems = []
    for node in nodes.values():
        for prereq in node.prerequisites:
            if prereq not in nodes:
                problems.append(f"{node.id}: unknown prerequisite '{prereq}'")

    # Depth-first cycle search; 1 = on the current path, 2 = finished
    state: dict[str, int] = {}

    def visit(node_id: str, path: list[str]) -> None:
        state[node_id] = 1
        for prereq in nodes[node_id].prerequisites:
            if prereq not in nodes:
                continue
            if state.get(prereq) == 1:
                cycle = path[path.index(prereq):] + [prereq]
                problems.append("cycle: " + " -> ".join(cycle))
            elif prereq not in state:
                visit(prereq, path + [prereq])
        state[node_id] = 2

    for node_id in nodes:
        if node_id not in state:
            visit(node_id, [node_id])
    return problems


class ResearchGraph:
    """Completed set, the single research slot, and the rules between them."""

    def __init__(self, nodes: dict[str, ResearchNode],
                 effects: Any | None = None) -> None:
        self.nodes = dict(nodes)
        self.effects = effects if effects is not None else ResearchBonuses()
        self.active: ActiveResearch | None = None
        self._completed: list[str] = []

    # ── Status ───────────────────────────────────────────────────────

    @property
    def completed(self) -> tuple[str, ...]:
        return tuple(self._completed)

    def is_completed(self, node_id: str) -> bool:
        return node_id in self._completed

    def missing_prerequisites(self, node_id: str) -> list[str]:
        node = self.nodes[node_id]
        return [p for p in node.prerequisites if p not in self._completed]

    def is_available(self, node_id: str) -> bool:
        if node_id not in self.nodes or self.is_completed(node_id):
            return False
        return not self.missing_prerequisites(node_id)

    def status(self, node_id: str) -> str:
        if self.is_completed(node_id):
            return COMPLETED
        if self.active is not None and self.active.node_id == node_id:
            return IN_PROGRESS
        if self.is_available(node_id):
            return AVAILABLE
        return LOCKED

    def statuses(self) -> dict[str, str]:
        return {node_id: self.status(node_id) for node_id in self.nodes}

    def nodes_in(self, category: str = "all") -> list[ResearchNode]:
        return [n for n in self.nodes.values()
                if category == "all" or n.category == category]

    # ── Research slot ────────────────────────────────────────────────

    def start_research(self, node_id: str, wallet: Wallet, day: int) -> list:
        """Pay for a node and occupy the research slot."""
        try:
            if self.active is not None:
                busy = self.nodes[self.active.node_id].name or self.active.node_id
                raise ValidationError("research_slot_occupied",
                                      f"Already researching {busy}")
            node = self.nodes.get(node_id)
            if node is None:
                raise ValidationError("unknown_research",
                                      f"Unknown research '{node_id}'")
            if self.is_completed(node_id):
                raise ValidationError("already_completed",
                                      f"{node.name} is already researched")
            missing = self.missing_prerequisites(node_id)
            if missing:
                raise ValidationError("unmet_prerequisites",
                                      f"{node.name} requires {', '.join(missing)}")
            if not wallet.spend(node.cost):
                raise ValidationError("insufficient_funds",
                                      "Not enough coins for research!")
        except ValidationError as exc:
            return rejection(exc)

        self.active = ActiveResearch(node_id=node.id, start_day=day,
                                     duration=node.research_time)
        print(f"[RESEARCH] Day {day}: started {node.id} "
              f"({node.research_time} days, {node.cost} coins)")
        return [
            ResearchStarted(node_id=node.id, cost=node.cost, day=day),
            Notification(f"Research started: {node.name}", INFO),
        ]

    def progress(self, day: int) -> float:
        """Percent complete of the active research (0 when idle)."""
        if self.active is None:
            return 0.0
        if self.active.duration <= 0:
            return 100.0
        elapsed = day - self.active.start_day
        return min(100.0, elapsed / self.active.duration * 100)

    def is_ready(self, day: int) -> bool:
        return self.active is not None and day >= self.active.done_on()

    def complete_research(self, day: int) -> list:
        """Finish the active research and apply its effects."""
        try:
            if self.active is None:
                raise ValidationError("no_active_research", "No research in progress")
            if not self.is_ready(day):
                raise ValidationError(
                    "research_in_progress",
                    f"Research finishes on day {self.active.done_on()}")
        except ValidationError as exc:
            return rejection(exc)

        node = self.nodes[self.active.node_id]
        self._completed.append(node.id)
        self.active = None
        self.effects.apply(node.id, node.effects)
        print(f"[RESEARCH] Day {day}: completed {node.id}")
        return [
            ResearchCompleted(node_id=node.id, effects=node.effects, day=day),
            Notification(f"Research complete: {node.name}", SUCCESS),
        ]
