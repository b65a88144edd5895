"""Segment patterns — what a single path component may match.

Every route node carries exactly one pattern.  The set is closed: matching
code dispatches on it with ``match`` and ``assert_never`` so that adding a
sixth kind is a type error everywhere it is not handled.

    Literal("users")            /users
    Wildcard()                  /[id]
    OptionalWildcard()          /[[lang]]
    RepeatedWildcard()          /[...rest]
    ComplexWildcard((...))      /v[major]-[minor]

``ComplexWildcard`` parts are themselves a closed union of ``Text`` and
``Glob``, matched within one decoded component (see ``complex_match``).
"""

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Text:
    """A literal run of characters inside a complex segment."""

    text: str


@dataclass(frozen=True, slots=True)
class Glob:
    """A generic wildcard inside a complex segment (zero or more characters)."""


Part: TypeAlias = Text | Glob


@dataclass(frozen=True, slots=True)
class Literal:
    """Matches a component whose percent-decoded form equals ``text``."""

    text: str


@dataclass(frozen=True, slots=True)
class Wildcard:
    """Matches exactly one component, any content."""


@dataclass(frozen=True, slots=True)
class OptionalWildcard:
    """Matches zero or one component."""


@dataclass(frozen=True, slots=True)
class RepeatedWildcard:
    """Matches one or more components."""


@dataclass(frozen=True, slots=True)
class ComplexWildcard:
    """Matches a component against a sequence of ``Text`` / ``Glob`` parts.

    Attributes:
        parts: Ordered sub-parts.  An empty tuple only matches an empty
            component.

    """

    parts: tuple[Part, ...]


SegmentPattern: TypeAlias = Literal | Wildcard | OptionalWildcard | RepeatedWildcard | ComplexWildcard
