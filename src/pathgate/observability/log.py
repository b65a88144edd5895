"""Event log — bounded, thread-safe store of route-table events.

Keeps the most recent ``GateEvent`` objects in a ring buffer so a running
service can answer "what did the gate decide lately, and why did the last
reload fail?" without a logging pipeline.

Thread Safety:
    All methods are protected by a ``threading.Lock``.  Safe for
    concurrent reads and writes from multiple threads.

"""

import threading
from collections import Counter, deque
from typing import Any

from pathgate.observability.events import (
    AccessOutcome,
    GateEvent,
    MatchEvaluated,
    ReloadFailed,
    TreeLoaded,
)


def _subject(event: GateEvent) -> str:
    """The path a check was about, or the source a tree came from."""
    match event:
        case MatchEvaluated(path=path):
            return path
        case TreeLoaded(source=source) | ReloadFailed(source=source):
            return source
    return ""


class EventLog:
    """Bounded event store with query support.

    When the buffer is full the oldest events are discarded.

    Args:
        max_events: Maximum number of events to retain.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[GateEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: GateEvent) -> None:
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        access: AccessOutcome | None = None,
        path: str | None = None,
        since_ns: int = 0,
        limit: int = 100,
    ) -> list[GateEvent]:
        """Return up to *limit* matching events, most recent first.

        Args:
            event_type: Only events of this class.
            access: Only ``MatchEvaluated`` events with this outcome.
            path: Only events whose checked path or tree source contains
                this substring.
            since_ns: Only events stamped at or after this time.
            limit: Maximum number of events to return.

        """
        if access is not None:
            event_type = MatchEvaluated

        with self._lock:
            snapshot = list(self._events)

        results: list[GateEvent] = []
        for event in reversed(snapshot):
            if len(results) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if access is not None and event.access != access:  # type: ignore[union-attr]
                continue
            if event.timestamp_ns < since_ns:
                continue
            if path is not None and path not in _subject(event):
                continue
            results.append(event)
        return results

    def recent(self, n: int = 20) -> list[GateEvent]:
        """Return the *n* most recent events, oldest first."""
        if n <= 0:
            return []
        with self._lock:
            return list(self._events)[-n:]

    def clear(self) -> int:
        """Drop every event and return how many there were."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Summarise stored events by type and by check outcome."""
        with self._lock:
            events = list(self._events)

        by_access = Counter(e.access for e in events if isinstance(e, MatchEvaluated))
        return {
            "total": len(events),
            "max_events": self._max_events,
            "by_type": dict(Counter(type(e).__name__ for e in events)),
            "by_access": dict(by_access),
        }
