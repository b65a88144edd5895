"""Shared type definitions for pathgate."""

from typing import Literal, TypeAlias

# Result of a route lookup: None = no route, False = public, True = login required
Decision: TypeAlias = bool | None

# Where a route tree came from
TreeSourceKind: TypeAlias = Literal["manifest", "routes", "memory"]
