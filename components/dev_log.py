"""components.dev_log — Day-stamped record of everything the city emitted.

``CitySim`` writes one entry per published event so the dashboard can
show the notification feed and a per-cell history without subscribing
to the bus.

Usage:
    log = sim.dev_log
    log.record(12, "market", "trade settled", details={"profit": 36.0})
    log.for_day(12)
    log.summary()        # {"market": 4, "notify": 9, ...}

Each entry is a dict:
    {"day": int, "cat": str, "msg": str, "index": int | None,
     "details": dict | None}
"""

from __future__ import annotations
from collections import Counter, deque
from dataclasses import dataclass, field


@dataclass
class DevLog:
    """Bounded economy log; the oldest entries fall off first."""

    max_entries: int = 500
    # Categories to drop on record (e.g. {"rejected"} to hide refusals)
    muted: set[str] = field(default_factory=set)
    entries: deque = field(init=False)
    _paused: bool = False

    def __post_init__(self):
        self.entries = deque(maxlen=self.max_entries)

    def record(self, day: int, cat: str, msg: str, *,
               index: int | None = None,
               details: dict | None = None) -> dict | None:
        if self._paused or cat in self.muted:
            return None
        entry = {"day": day, "cat": cat, "msg": msg,
                 "index": index, "details": details}
        self.entries.append(entry)
        return entry

    def clear(self):
        self.entries.clear()

    def pause(self):
        self._paused = True

    def resume(self):
        self._paused = False

    # ── Queries (newest last) ────────────────────────────────────────

    def recent(self, n: int = 50) -> list[dict]:
        return list(self.entries)[-n:]

    def for_index(self, index: int, n: int = 30) -> list[dict]:
        """History of one grid cell."""
        return [e for e in self.entries if e["index"] == index][-n:]

    def for_cat(self, cat: str, n: int = 50) -> list[dict]:
        return [e for e in self.entries if e["cat"] == cat][-n:]

    def for_day(self, day: int) -> list[dict]:
        return [e for e in self.entries if e["day"] == day]

    def summary(self) -> dict[str, int]:
        return dict(Counter(e["cat"] for e in self.entries))
