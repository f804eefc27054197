from __future__ import annotations

from collections import defaultdict
from datetime import UTC, datetime
from typing import Any, Callable, DefaultDict, Sequence
from uuid import uuid4

from dugout.contracts import LineupEvent

LineupEventHandler = Callable[[LineupEvent], None]


def make_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex[:12]}"


def lineup_event(event_type: str, players: Sequence[str] = (), **detail: Any) -> LineupEvent:
    return LineupEvent(
        event_id=make_id("evt"),
        time=datetime.now(UTC),
        event_type=event_type,
        players=list(players),
        detail=detail,
    )


class EventBus:
    """Fan-out of session changes (generated, cleared, swapped) to subscribers, with per-type tallies."""

    def __init__(self) -> None:
        self._handlers: list[LineupEventHandler] = []
        self._counter: DefaultDict[str, int] = defaultdict(int)

    def subscribe(self, handler: LineupEventHandler) -> None:
        self._handlers.append(handler)

    def publish(self, event: LineupEvent) -> None:
        self._counter[event.event_type] += 1
        for handler in self._handlers:
            handler(event)

    def emitted_count(self, event_type: str | None = None) -> int:
        if event_type is None:
            return sum(self._counter.values())
        return self._counter[event_type]
