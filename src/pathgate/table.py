"""Route table — the decision API that request handlers call.

Wraps a route tree with:
- a three-way ``check()`` that never raises for client input,
- optional event recording through a ``MatchCollector``,
- atomic replacement of the whole tree for live reloads.

Thread Safety:
    The installed tree is immutable and replaced by a single reference
    assignment.  Concurrent readers see either the old tree or the new one,
    never a partially built tree.

"""

from __future__ import annotations

import time
from enum import Enum
from typing import TYPE_CHECKING

from pathgate._errors import MalformedPathError, NoRouteError
from pathgate.matching.render import count_nodes, render

if TYPE_CHECKING:
    from pathgate._types import Decision, TreeSourceKind
    from pathgate.matching.tree import RouteRoot
    from pathgate.observability.collector import MatchCollector


class Access(Enum):
    """Outcome of checking a path against the route table."""

    NO_MATCH = "no_match"
    PUBLIC = "public"
    LOGIN_REQUIRED = "login_required"
    MALFORMED = "malformed"

    @property
    def matched(self) -> bool:
        return self in (Access.PUBLIC, Access.LOGIN_REQUIRED)


def access_for(decision: Decision) -> Access:
    """Map a core decision to an ``Access`` outcome."""
    if decision is None:
        return Access.NO_MATCH
    return Access.LOGIN_REQUIRED if decision else Access.PUBLIC


class RouteTable:
    """A replaceable route tree with a gatekeeping API.

    Usage::

        table = RouteTable(scan_routes(Path("src/routes")))
        table.check("/users/42")           # Access.LOGIN_REQUIRED
        table.check("/nope")               # Access.NO_MATCH
        table.check("/users/%E0%A4%A")     # Access.MALFORMED

    Args:
        tree: The route tree to match against.
        collector: Optional collector that receives one ``MatchEvaluated``
            event per ``check()``.
        source: Description of where *tree* came from.
        kind: How *tree* was built.
        duration_ms: Time taken to build *tree*, recorded with the load event.

    """

    __slots__ = ("_collector", "_kind", "_source", "_tree")

    def __init__(
        self,
        tree: RouteRoot,
        *,
        collector: MatchCollector | None = None,
        source: str = "<memory>",
        kind: TreeSourceKind = "memory",
        duration_ms: float = 0.0,
    ) -> None:
        self._tree = tree
        self._collector = collector
        self._source = source
        self._kind = kind
        if collector is not None:
            collector.record_load(
                source, kind, node_count=count_nodes(tree), duration_ms=duration_ms
            )

    @property
    def tree(self) -> RouteRoot:
        """The currently installed route tree."""
        return self._tree

    @property
    def source(self) -> str:
        return self._source

    @property
    def collector(self) -> MatchCollector | None:
        return self._collector

    def replace(
        self,
        tree: RouteRoot,
        *,
        source: str | None = None,
        kind: TreeSourceKind | None = None,
        duration_ms: float = 0.0,
    ) -> None:
        """Install a new tree in place of the current one."""
        if source is not None:
            self._source = source
        if kind is not None:
            self._kind = kind
        self._tree = tree
        if self._collector is not None:
            self._collector.record_load(
                self._source,
                self._kind,
                node_count=count_nodes(tree),
                duration_ms=duration_ms,
            )

    def find(self, path: str) -> Decision:
        """Return the core decision for *path*.

        Raises:
            MalformedPathError: If *path* has invalid percent-encoding in a
                component that had to be decoded.

        """
        return self._tree.find(path)

    def check(self, path: str) -> Access:
        """Classify *path* without raising for malformed input."""
        start = time.perf_counter()
        try:
            access = access_for(self._tree.find(path))
        except MalformedPathError:
            access = Access.MALFORMED
        if self._collector is not None:
            self._collector.record_match(
                path,
                access.value,  # type: ignore[arg-type]
                duration_ms=(time.perf_counter() - start) * 1000,
            )
        return access

    def requires_login(self, path: str) -> bool:
        """Return whether the route matching *path* needs authentication.

        Raises:
            NoRouteError: If no route matches *path*.
            MalformedPathError: If *path* has invalid percent-encoding.

        """
        decision = self._tree.find(path)
        if decision is None:
            raise NoRouteError(path)
        return decision

    def render(self, *, pretty: bool = False) -> str:
        return render(self._tree, pretty=pretty)

    def __str__(self) -> str:
        return render(self._tree)
