"""Human-readable rendering of route trees.

Compact form::

    / { /users/* (terminating) { /edit }, (/*) { /docs }, /**, /v*-* }

Pretty form (``pretty=True``)::

    / {
        /users/* (terminating) {
            /edit,
        },
        (/*) {
            /docs,
        },
        /**,
        /v*-*,
    }

A node with a single child that is not itself terminating is written inline
(``/users/*``), so linear chains read like the paths they match.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, assert_never

from pathgate.matching.segments import (
    ComplexWildcard,
    Literal,
    OptionalWildcard,
    RepeatedWildcard,
    Text,
    Wildcard,
)

if TYPE_CHECKING:
    from pathgate.matching.segments import SegmentPattern
    from pathgate.matching.tree import RouteNode, RouteRoot

_INDENT = "    "


def render(tree: RouteRoot | RouteNode, *, pretty: bool = False) -> str:
    """Render a root or a subtree."""
    from pathgate.matching.tree import RouteRoot

    if isinstance(tree, RouteRoot):
        return render_root(tree, pretty=pretty)
    return render_node(tree, pretty=pretty)


def render_root(root: RouteRoot, *, pretty: bool = False) -> str:
    children = _render_children(root.children, root.terminating, pretty=pretty)
    if not root.terminating and len(root.children) == 1:
        # The inline child already starts with its own separator
        return children
    return "/" + children


def render_node(node: RouteNode, *, pretty: bool = False) -> str:
    return _render_pattern(node.pattern) + _render_children(
        node.children, node.terminating, pretty=pretty
    )


def render_pattern(pattern: SegmentPattern) -> str:
    """Render one segment pattern without its leading separator.

    ``Literal("users")`` -> ``users``, ``Wildcard()`` -> ``*``,
    ``RepeatedWildcard()`` -> ``**``, ``ComplexWildcard`` -> ``v*-*``.
    ``OptionalWildcard`` has no separator-free form and renders as ``*``.
    """
    match pattern:
        case Literal(text=text):
            return text
        case Wildcard() | OptionalWildcard():
            return "*"
        case RepeatedWildcard():
            return "**"
        case ComplexWildcard(parts=parts):
            return "".join(part.text if isinstance(part, Text) else "*" for part in parts)
        case unreachable:
            assert_never(unreachable)


def _render_pattern(pattern: SegmentPattern) -> str:
    if isinstance(pattern, OptionalWildcard):
        return "(/*)"
    return "/" + render_pattern(pattern)


def _render_children(
    children: tuple[RouteNode, ...],
    terminating: bool,
    *,
    pretty: bool,
) -> str:
    if not children:
        return ""

    prefix = " (terminating)" if terminating else ""
    if not terminating and len(children) == 1:
        return render_node(children[0], pretty=pretty)

    if pretty:
        lines = [prefix + " {"]
        for child in children:
            rendered = render_node(child, pretty=True) + ","
            lines.extend(_INDENT + line for line in rendered.splitlines())
        lines.append("}")
        return "\n".join(lines)

    return prefix + " { " + ", ".join(render_node(c) for c in children) + " }"


def count_nodes(tree: RouteRoot | RouteNode) -> int:
    """Count nodes below and including *tree* (the root counts as one)."""
    count = 0
    stack: list[RouteRoot | RouteNode] = [tree]
    while stack:
        node = stack.pop()
        count += 1
        stack.extend(node.children)
    return count

