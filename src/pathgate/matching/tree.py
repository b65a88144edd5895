"""Route tree — recursive-descent matching of a path against segment patterns.

A tree is a ``RouteRoot`` whose children are ``RouteNode`` objects.  Each
node owns one ``SegmentPattern``, an ordered tuple of children, and two
flags: ``terminating`` (a path may end here) and ``requires_login``
(meaningful only on terminating nodes).

Matching walks the path one component at a time.  Each level splits off the
component it was handed with ``split_path``; nothing is precomputed.  Child
order is the match priority: the first child to return a decision wins and
the remaining children are never consulted.

Optional and repeated wildcards first try a *shortcut*: hand the unsplit
path straight to the children, consuming nothing.  Only when that fails do
they consume a component.  Zero-width matches therefore win over greedy
consumption whenever both are possible.

An empty path holds no component: wildcards and the consuming branch of a
repeated wildcard never match it.  An optional wildcard does, standing for
the absent component.  Literal and complex patterns still compare against
the empty string.

Recursion depth is bounded by the tree depth.  A ``RepeatedWildcard``
absorbs components in a loop, so long paths add no stack frames.

Thread Safety:
    Nodes are frozen and matching never mutates them.  Any number of
    threads may match against the same tree concurrently.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never

from pathgate._types import Decision
from pathgate.matching.complex import complex_match
from pathgate.matching.decode import decode_segment, split_path
from pathgate.matching.segments import (
    ComplexWildcard,
    Literal,
    OptionalWildcard,
    RepeatedWildcard,
    SegmentPattern,
    Wildcard,
)


def _find_in(children: tuple[RouteNode, ...], path: str) -> Decision:
    """Return the first non-None decision from *children*, in order."""
    for child in children:
        decision = child.find(path)
        if decision is not None:
            return decision
    return None


@dataclass(frozen=True, slots=True)
class RouteNode:
    """One level of the route tree.

    Attributes:
        pattern: What a path component must look like to enter this node.
        children: Child nodes in match-priority order.
        terminating: True if a path ending exactly here is a valid route.
        requires_login: Whether the route ending here needs authentication.

    """

    pattern: SegmentPattern
    children: tuple[RouteNode, ...] = ()
    terminating: bool = False
    requires_login: bool = False

    def find(self, path: str) -> Decision:
        """Match *path* (with no leading ``/``) against this subtree.

        Returns ``None`` when nothing matches, otherwise the
        ``requires_login`` flag of the node the path ended on.

        Raises:
            MalformedPathError: If a component compared against a literal or
                complex pattern has invalid percent-encoding.

        """
        segment, remaining = split_path(path)

        match self.pattern:
            case Literal(text=text):
                matches = decode_segment(segment) == text
            case ComplexWildcard(parts=parts):
                matches = complex_match(parts, decode_segment(segment))
            case Wildcard():
                matches = bool(path)
            case OptionalWildcard():
                decision = self._find_child(path)
                if decision is not None:
                    return decision
                matches = True
            case RepeatedWildcard():
                return self._find_repeated(path)
            case unreachable:
                assert_never(unreachable)

        if not matches:
            return None
        if not remaining and self.terminating:
            return self.requires_login
        return self._find_child(remaining)

    def _find_repeated(self, path: str) -> Decision:
        """Absorb one or more components, trying the children after each.

        Iterative so that long paths cannot exhaust the interpreter stack.
        Order matches absorbing one component per recursive call: every
        shortcut from shallowest to deepest, then the consuming fallbacks
        from deepest back to shallowest.
        """
        # Suffixes left after absorbing 0, 1, 2, ... components
        suffixes = [path]
        decision = self._find_child(path)
        while decision is None:
            remaining = split_path(suffixes[-1])[1]
            if not remaining:
                break
            suffixes.append(remaining)
            decision = self._find_child(remaining)
        if decision is not None:
            return decision

        for suffix in reversed(suffixes):
            if not suffix:
                continue
            remaining = split_path(suffix)[1]
            if not remaining and self.terminating:
                return self.requires_login
            decision = self._find_child(remaining)
            if decision is not None:
                return decision
        return None

    def _find_child(self, path: str) -> Decision:
        return _find_in(self.children, path)

    def __str__(self) -> str:
        from pathgate.matching.render import render_node

        return render_node(self)


@dataclass(frozen=True, slots=True)
class RouteRoot:
    """Entry point of a route tree.

    Accepts any prefix unconditionally; strips one leading ``/`` and hands
    the rest to its children.

    Usage::

        root = RouteRoot(children=(
            RouteNode(Literal("users"), children=(
                RouteNode(Wildcard(), terminating=True, requires_login=True),
            )),
        ))
        root.find("/users/42")  # True
        root.find("/users")     # None

    """

    children: tuple[RouteNode, ...] = ()
    terminating: bool = False
    requires_login: bool = False

    def find(self, path: str) -> Decision:
        """Return the login requirement of the route matching *path*, or None."""
        if path.startswith("/"):
            path = path[1:]

        if not path and self.terminating:
            return self.requires_login
        return _find_in(self.children, path)

    def __str__(self) -> str:
        from pathgate.matching.render import render_root

        return render_root(self)
