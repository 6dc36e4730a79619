"""core/events.py — Economy events and the event bus.

Every engine operation returns a list of events instead of invoking
host callbacks.  The orchestrator also publishes them on the bus::

    sim.bus.subscribe(DisasterOccurred, show_banner)
    sim.bus.subscribe(ANY, feed.append)
    sim.tick(day)
    sim.bus.drain()

A refused player action is never an exception to the caller: engines
raise ``ValidationError`` internally and return ``rejection(exc)``,
which leaves every piece of state untouched.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable
from collections import Counter, defaultdict, deque
import traceback

from core import tuning


# Notification levels understood by the host's toast sink
SUCCESS = "success"
ERROR = "error"
WARNING = "warning"
INFO = "info"


# ═══════════════════════════════════════════════════════════════════
#  Validation
# ═══════════════════════════════════════════════════════════════════

class ValidationError(Exception):
    """A player action was refused.  Never fatal: the action is a no-op."""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


def rejection(exc: ValidationError) -> list:
    """The events a refused action produces."""
    return [ActionRejected(reason=exc.reason, message=exc.message),
            Notification(message=exc.message, level=ERROR)]


def was_rejected(events: list) -> bool:
    return any(isinstance(ev, ActionRejected) for ev in events)


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class Notification:
    """A message for the player's toast feed."""
    message: str
    level: str = INFO


@dataclass
class ActionRejected:
    """A player action failed validation; nothing changed."""
    reason: str
    message: str = ""


@dataclass
class MaintenancePerformed:
    index: int
    cost: int


@dataclass
class BuildingRepaired:
    index: int
    cost: int


@dataclass
class DisasterOccurred:
    """A catalog disaster triggered on ``day``."""
    disaster: Any
    day: int


@dataclass
class DisasterEnded:
    disaster_id: str
    day: int


@dataclass
class TradeStarted:
    """A buy order left for its destination."""
    route_id: str
    good_id: str
    quantity: int
    cost: int


@dataclass
class GoodsSold:
    route_id: str
    good_id: str
    quantity: int
    proceeds: int


@dataclass
class TradeCompleted:
    """A buy order reached its destination and was settled."""
    trade_id: str
    profit: float
    credited: int = 0


@dataclass
class ResearchStarted:
    node_id: str
    cost: int
    day: int


@dataclass
class ResearchCompleted:
    node_id: str
    effects: Any = None
    day: int = 0


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

# Subscribe under this key to receive every event (dashboard feeds)
ANY = "*"


def _event_key(event_type) -> str:
    return event_type if isinstance(event_type, str) else event_type.__name__


class EventBus:
    """Queue between the city orchestrator and the host.

    Engines never see the bus: ``CitySim`` queues whatever an operation
    returned, and the host drains once per frame or per day.
    """

    def __init__(self, max_pending: int | None = None):
        if max_pending is None:
            max_pending = tuning.get("events", "max_pending", 1000)
        # Oldest undelivered events fall off when a host never drains
        self._pending: deque = deque(maxlen=max_pending)
        self._handlers: dict[str, list[Callable]] = defaultdict(list)
        self._counts: Counter = Counter()
        self.dropped = 0

    def emit(self, event) -> None:
        if len(self._pending) == self._pending.maxlen:
            self.dropped += 1
        self._pending.append(event)

    def emit_all(self, events: list) -> None:
        for event in events:
            self.emit(event)

    def subscribe(self, event_type: str | type, handler: Callable) -> None:
        """Call *handler* for each drained event of *event_type*.

        *event_type* is an event class or its name (``"TradeCompleted"``);
        ``ANY`` receives everything after the type-specific handlers.
        """
        self._handlers[_event_key(event_type)].append(handler)

    def unsubscribe(self, event_type: str | type, handler: Callable) -> None:
        handlers = self._handlers.get(_event_key(event_type), [])
        if handler in handlers:
            handlers.remove(handler)

    def drain(self, limit: int = 1000) -> int:
        """Deliver queued events in FIFO order.  Returns how many were delivered.

        Events queued by handlers are delivered in the same drain, up to
        *limit* events in total; anything beyond stays queued.
        """
        delivered = 0
        while self._pending and delivered < limit:
            event = self._pending.popleft()
            name = type(event).__name__
            self._counts[name] += 1
            for handler in self._handlers.get(name, []) + self._handlers.get(ANY, []):
                try:
                    handler(event)
                except Exception as exc:
                    print(f"[EVENT] {name} handler {getattr(handler, '__name__', handler)} "
                          f"failed: {exc}")
                    traceback.print_exc()
            delivered += 1
        return delivered

    def clear(self) -> None:
        self._pending.clear()

    def stats(self) -> dict[str, int]:
        """Delivered event counts by type since the bus was created."""
        return dict(self._counts)

    def pending_count(self) -> int:
        return len(self._pending)

    def __repr__(self) -> str:
        return (f"EventBus(pending={len(self._pending)}, "
                f"types={sorted(k for k, v in self._handlers.items() if v)})")
