"""Routes scanner — build a route tree from a SvelteKit-style routes directory.

Every directory is a path segment; a directory holding a page file is a
route that a path may end on::

    routes/+page.svelte                      -> /
    routes/users/[id]/+page.svelte           -> /users/*
    routes/docs/[...rest]/+page.svelte       -> /docs/**
    routes/[[lang]]/about/+page.svelte       -> (/*)/about
    routes/files/v[major]-[minor]/+page.svelte -> /files/v*-*
    routes/(protected)/account/+page.svelte  -> /account  (login required)

Directory name conventions:

    (name)      group: contributes no segment, children merge into parent
    [[name]]    optional wildcard
    [...name]   repeated wildcard (one or more segments)
    [name]      wildcard (exactly one segment)
    a[b]c[d]    complex wildcard (glob within one segment)
    anything    literal

Directories with no page file anywhere below them are pruned.  Children are
ordered by directory name so the same tree is produced on every platform.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from pathgate._errors import RoutesError
from pathgate.matching.segments import (
    ComplexWildcard,
    Glob,
    OptionalWildcard,
    Part,
    RepeatedWildcard,
    SegmentPattern,
    Text,
    Wildcard,
)
from pathgate.matching.segments import Literal as LiteralSegment
from pathgate.matching.tree import RouteNode, RouteRoot
from pathgate.routes.manifest import load_manifest

if TYPE_CHECKING:
    from pathgate._types import TreeSourceKind
    from pathgate.config import PathgateConfig
    from pathgate.observability.collector import MatchCollector
    from pathgate.table import RouteTable

DEFAULT_PAGE_PATTERN = r"\+page(|@.*)\.svelte"

SegmentKind: TypeAlias = Literal[
    "group", "optional", "repeated", "wildcard", "complex", "literal"
]


@dataclass(slots=True)
class _Scanned:
    """What one directory contributes to its parent."""

    children: list[RouteNode] = field(default_factory=list)
    terminating: bool = False
    requires_login: bool = False


# ---------------------------------------------------------------------------
# Directory name classification
# ---------------------------------------------------------------------------


def classify_segment(name: str) -> SegmentKind:
    """Classify a routes directory name.

    ``(app)`` -> group, ``[[lang]]`` -> optional, ``[...rest]`` -> repeated,
    ``[id]`` -> wildcard, ``v[major]-[minor]`` -> complex, ``users`` -> literal.

    """
    if name.startswith("(") and name.endswith(")"):
        return "group"
    if name.startswith("[[") and name.endswith("]]") and _plain(name[2:-2]):
        return "optional"
    if name.startswith("[...") and name.endswith("]") and _plain(name[4:-1]):
        return "repeated"
    if name.startswith("[") and name.endswith("]") and _plain(name[1:-1]):
        return "wildcard"

    # TODO: recognise SvelteKit [x+nn] and [u+nnnn] character escapes as literal text
    opened = False
    for char in name:
        if char == "[":
            opened = True
        elif char == "]" and opened:
            return "complex"
    return "literal"


def _plain(inner: str) -> bool:
    return "[" not in inner and "]" not in inner


def parse_complex(name: str) -> tuple[Part, ...]:
    """Split a complex directory name into text and glob parts.

    Each outermost ``[...]`` group (groups may nest) becomes one ``Glob``;
    the text between groups becomes ``Text``.  Empty text runs are dropped
    and an unclosed trailing ``[`` stays part of the text.

    ``v[major]-[minor]`` -> ``(Text("v"), Glob(), Text("-"), Glob())``

    """
    parts: list[Part] = []
    text_start = 0
    group_start: int | None = None
    depth = 0

    for i, char in enumerate(name):
        if group_start is None:
            if char == "[":
                group_start = i
                depth = 1
        elif char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                if group_start > text_start:
                    parts.append(Text(name[text_start:group_start]))
                parts.append(Glob())
                text_start = i + 1
                group_start = None

    if text_start < len(name):
        parts.append(Text(name[text_start:]))
    return tuple(parts)


def segment_for(name: str) -> SegmentPattern | None:
    """Return the segment pattern for a directory name, or None for groups."""
    match classify_segment(name):
        case "group":
            return None
        case "optional":
            return OptionalWildcard()
        case "repeated":
            return RepeatedWildcard()
        case "wildcard":
            return Wildcard()
        case "complex":
            return ComplexWildcard(parse_complex(name))
        case "literal":
            return LiteralSegment(name)


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


def scan_routes(
    routes_dir: Path,
    *,
    page_pattern: str = DEFAULT_PAGE_PATTERN,
    login_groups: tuple[str, ...] = (),
) -> RouteRoot:
    """Scan *routes_dir* and return the route tree it describes.

    Returns an empty, non-terminating root when *routes_dir* does not exist
    or holds no pages.

    Raises:
        RoutesError: If *routes_dir* exists but is not a readable directory,
            or *page_pattern* is not a valid regex.

    """
    if not routes_dir.exists():
        return RouteRoot()
    if not routes_dir.is_dir():
        msg = f"Routes path {routes_dir} is not a directory"
        raise RoutesError(msg)

    try:
        page_re = re.compile(page_pattern)
    except re.error as exc:
        msg = f"Invalid page pattern {page_pattern!r}: {exc}"
        raise RoutesError(msg) from exc

    scanned = _scan_dir(routes_dir, page_re, frozenset(login_groups), login=False)
    if scanned is None:
        return RouteRoot()
    return RouteRoot(
        children=tuple(scanned.children),
        terminating=scanned.terminating,
        requires_login=scanned.requires_login,
    )


def _scan_dir(
    directory: Path,
    page_re: re.Pattern[str],
    login_groups: frozenset[str],
    *,
    login: bool,
) -> _Scanned | None:
    """Scan one directory; None when nothing below it is a route."""
    result = _Scanned()

    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        msg = f"Cannot read routes directory {directory}: {exc}"
        raise RoutesError(msg) from exc

    for entry in entries:
        if entry.is_dir():
            child_login = login or entry.name in login_groups
            sub = _scan_dir(entry, page_re, login_groups, login=child_login)
            if sub is None:
                continue

            pattern = segment_for(entry.name)
            if pattern is None:
                # Group: merge into this directory
                result.children.extend(sub.children)
                if sub.terminating:
                    result.terminating = True
                    result.requires_login = result.requires_login or sub.requires_login
            else:
                result.children.append(RouteNode(
                    pattern=pattern,
                    children=tuple(sub.children),
                    terminating=sub.terminating,
                    requires_login=sub.requires_login,
                ))
        elif entry.is_file() and page_re.fullmatch(entry.name):
            result.terminating = True
            result.requires_login = result.requires_login or login

    if not result.terminating and not result.children:
        return None
    return result


# ---------------------------------------------------------------------------
# Config-driven loading
# ---------------------------------------------------------------------------


def load_tree(config: PathgateConfig) -> tuple[RouteRoot, str, TreeSourceKind]:
    """Build the route tree described by *config*.

    Uses the manifest when one is configured, otherwise scans the routes
    directory.

    Returns:
        ``(tree, source, kind)`` where *source* is the file or directory the
        tree came from.

    """
    manifest_path = config.manifest_path
    if manifest_path is not None:
        return load_manifest(manifest_path), str(manifest_path), "manifest"

    tree = scan_routes(
        config.routes_path,
        page_pattern=config.page_pattern,
        login_groups=config.login_groups,
    )
    return tree, str(config.routes_path), "routes"


def build_table(
    config: PathgateConfig,
    *,
    collector: MatchCollector | None = None,
) -> RouteTable:
    """Load the configured tree into a new ``RouteTable``."""
    from pathgate.table import RouteTable

    start = time.perf_counter()
    tree, source, kind = load_tree(config)
    return RouteTable(
        tree,
        collector=collector,
        source=source,
        kind=kind,
        duration_ms=(time.perf_counter() - start) * 1000,
    )
