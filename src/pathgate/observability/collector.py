"""Match collector — records route-table activity into an event log.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.
    Safe for concurrent use from multiple request-handling threads.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pathgate.observability.events import (
    MatchEvaluated,
    ReloadFailed,
    TreeLoaded,
    now_ns,
)
from pathgate.observability.log import EventLog

if TYPE_CHECKING:
    from pathgate._types import TreeSourceKind
    from pathgate.observability.events import AccessOutcome


class MatchCollector:
    """Event collector for a route table and its reloader.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_match(
        self,
        path: str,
        access: AccessOutcome,
        *,
        duration_ms: float = 0.0,
    ) -> None:
        """Record the outcome of a route check."""
        self._log.append(
            MatchEvaluated(
                path=path,
                access=access,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_load(
        self,
        source: str,
        kind: TreeSourceKind,
        *,
        node_count: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a route tree being built and installed."""
        self._log.append(
            TreeLoaded(
                source=source,
                kind=kind,
                node_count=node_count,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_reload_failure(self, source: str, error: str) -> None:
        """Record a failed rebuild."""
        self._log.append(
            ReloadFailed(source=source, error=error, timestamp_ns=now_ns())
        )
