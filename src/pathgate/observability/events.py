"""Event model for route-table observability.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import Literal, TypeAlias

from pathgate._types import TreeSourceKind

AccessOutcome: TypeAlias = Literal["no_match", "public", "login_required", "malformed"]


# ---------------------------------------------------------------------------
# Matching events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MatchEvaluated:
    """A path was checked against the route table.

    Attributes:
        path: The path as supplied by the caller.
        access: Outcome of the check.
        duration_ms: Time spent matching in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    access: AccessOutcome
    duration_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Tree lifecycle events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TreeLoaded:
    """A route tree was built and installed.

    Attributes:
        source: Routes directory or manifest file the tree came from.
        kind: How the tree was built.
        node_count: Number of nodes in the tree, root included.
        duration_ms: Time taken to build the tree in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    source: str
    kind: TreeSourceKind
    node_count: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ReloadFailed:
    """Rebuilding a route tree failed; the previous tree stays installed.

    Attributes:
        source: Routes directory or manifest file that failed to load.
        error: The error message.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    source: str
    error: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

GateEvent: TypeAlias = MatchEvaluated | TreeLoaded | ReloadFailed


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
