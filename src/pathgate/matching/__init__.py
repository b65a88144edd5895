"""Route matching core — pure, I/O-free decisions over an immutable tree.

Public API::

    from pathgate.matching import RouteRoot, RouteNode, Literal, Wildcard

    root = RouteRoot(children=(
        RouteNode(Literal("users"), children=(
            RouteNode(Wildcard(), terminating=True, requires_login=True),
        )),
    ))
    root.find("/users/42")  # True  (match, login required)
    root.find("/admin")     # None  (no match)
"""

from pathgate.matching.complex import complex_match
from pathgate.matching.decode import decode_segment, split_path
from pathgate.matching.render import count_nodes, render
from pathgate.matching.segments import (
    ComplexWildcard,
    Glob,
    Literal,
    OptionalWildcard,
    Part,
    RepeatedWildcard,
    SegmentPattern,
    Text,
    Wildcard,
)
from pathgate.matching.tree import RouteNode, RouteRoot

__all__ = [
    "ComplexWildcard",
    "Glob",
    "Literal",
    "OptionalWildcard",
    "Part",
    "RepeatedWildcard",
    "RouteNode",
    "RouteRoot",
    "SegmentPattern",
    "Text",
    "Wildcard",
    "complex_match",
    "count_nodes",
    "decode_segment",
    "render",
    "split_path",
]
