"""Shared test fixtures for pathgate."""

from __future__ import annotations

from pathlib import Path

import pytest

from pathgate.matching.segments import Literal, SegmentPattern, Wildcard
from pathgate.matching.tree import RouteNode, RouteRoot


def node(
    pattern: SegmentPattern,
    *children: RouteNode,
    terminating: bool = False,
    login: bool = False,
) -> RouteNode:
    """Shorthand for building route nodes in tests."""
    return RouteNode(
        pattern=pattern,
        children=children,
        terminating=terminating,
        requires_login=login,
    )


def root(*children: RouteNode, terminating: bool = False, login: bool = False) -> RouteRoot:
    """Shorthand for building route roots in tests."""
    return RouteRoot(children=children, terminating=terminating, requires_login=login)


def make_routes(routes_dir: Path, *pages: str) -> Path:
    """Create page files under *routes_dir*.

    Each entry is a page path relative to the routes directory, e.g.
    ``"users/[id]/+page.svelte"``.  Entries ending in ``/`` create empty
    directories.
    """
    routes_dir.mkdir(parents=True, exist_ok=True)
    for page in pages:
        target = routes_dir / page
        if page.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("<h1>page</h1>\n")
    return routes_dir


@pytest.fixture
def users_tree() -> RouteRoot:
    """root -> /users (not terminating) -> /* (terminating, login required)."""
    return root(
        node(Literal("users"), node(Wildcard(), terminating=True, login=True)),
    )


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project root with a small SvelteKit routes tree."""
    make_routes(
        tmp_path / "src" / "routes",
        "+page.svelte",
        "about/+page.svelte",
        "users/[id]/+page.svelte",
        "docs/[...rest]/+page.svelte",
        "(protected)/account/+page.svelte",
        "(protected)/account/settings/+page.svelte",
        "lib/",
    )
    return tmp_path
