"""Observability — an event model for route checks and tree reloads.

All events are frozen dataclasses with nanosecond timestamps, safe for
concurrent production from multiple threads.

Quick Start:
    >>> from pathgate.observability import MatchCollector, EventLog
    >>> log = EventLog()
    >>> collector = MatchCollector(log)
    >>> # Pass collector to RouteTable(tree, collector=collector)
    >>> # Every check() then records a MatchEvaluated event

"""

from pathgate.observability.collector import MatchCollector
from pathgate.observability.events import (
    AccessOutcome,
    GateEvent,
    MatchEvaluated,
    ReloadFailed,
    TreeLoaded,
    now_ns,
)
from pathgate.observability.log import EventLog

__all__ = [
    "AccessOutcome",
    "EventLog",
    "GateEvent",
    "MatchCollector",
    "MatchEvaluated",
    "ReloadFailed",
    "TreeLoaded",
    "now_ns",
]
