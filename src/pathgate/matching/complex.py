"""Intra-segment wildcard matching.

Glob-style backtracking within one decoded path component, used by
``ComplexWildcard`` nodes such as ``v[major]-[minor]``.

A ``Glob`` tries the shortest consumption first (zero characters, then one,
then two, ...).  ``Text`` parts never backtrack: the component either starts
with the text or the branch fails.  Worst case is exponential in the number
of adjacent globs; route segment patterns are short and authored by hand.
"""

from collections.abc import Sequence
from typing import assert_never

from pathgate.matching.segments import Glob, Part, Text


def complex_match(parts: Sequence[Part], text: str) -> bool:
    """Return True if *text* can be partitioned to satisfy *parts*.

    Examples::

        complex_match([], "")                                 -> True
        complex_match([Glob()], "anything")                   -> True
        complex_match([Text("ab"), Glob(), Text("z")], "abXYz") -> True
        complex_match([Text("ab"), Text("z")], "abc")         -> False

    """
    return _match_from(parts, 0, text)


def _match_from(parts: Sequence[Part], index: int, text: str) -> bool:
    if index == len(parts):
        return not text

    match parts[index]:
        case Glob():
            # A trailing glob swallows whatever is left
            if index == len(parts) - 1:
                return True
            for start in range(len(text) + 1):
                if _match_from(parts, index + 1, text[start:]):
                    return True
            return False
        case Text(text=literal):
            if not text.startswith(literal):
                return False
            return _match_from(parts, index + 1, text[len(literal):])
        case unreachable:
            assert_never(unreachable)
