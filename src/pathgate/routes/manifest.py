"""Route manifests — serialized route trees in JSON or YAML.

A manifest mirrors the tree shape one-to-one::

    {
      "terminating": false,
      "requiresLogin": false,
      "children": [
        {
          "segment": {"static": "users"},
          "children": [
            {"segment": "wildcard", "terminating": true, "requiresLogin": true}
          ]
        },
        {"segment": {"complexWildcard": [{"static": "v"}, "wildcard"]}, "terminating": true}
      ]
    }

``segment`` is one of ``"wildcard"``, ``"optionalWildcard"``,
``"repeatedWildcard"``, ``{"static": text}`` or ``{"complexWildcard": parts}``
where each part is ``"wildcard"`` or ``{"static": text}``.  Missing fields
default to ``"wildcard"``, no children, and ``false``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, assert_never

import yaml

from pathgate._errors import ManifestError
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

_KEYWORD_SEGMENTS: dict[str, SegmentPattern] = {
    "wildcard": Wildcard(),
    "optionalWildcard": OptionalWildcard(),
    "repeatedWildcard": RepeatedWildcard(),
}

_YAML_SUFFIXES: frozenset[str] = frozenset({".yaml", ".yml"})


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def tree_from_manifest(data: object) -> RouteRoot:
    """Build a route tree from a decoded manifest mapping.

    Raises:
        ManifestError: On unknown segment kinds or fields of the wrong type.

    """
    node = _expect_mapping(data, "$")
    return RouteRoot(
        children=_children_from(node, "$"),
        terminating=_flag(node, "terminating", "$"),
        requires_login=_flag(node, "requiresLogin", "$"),
    )


def _node_from(data: object, where: str) -> RouteNode:
    node = _expect_mapping(data, where)
    return RouteNode(
        pattern=_segment_from(node.get("segment", "wildcard"), f"{where}.segment"),
        children=_children_from(node, where),
        terminating=_flag(node, "terminating", where),
        requires_login=_flag(node, "requiresLogin", where),
    )


def _children_from(node: dict[str, Any], where: str) -> tuple[RouteNode, ...]:
    children = node.get("children", [])
    if not isinstance(children, list):
        msg = f"{where}.children must be a list, got {type(children).__name__}"
        raise ManifestError(msg)
    return tuple(
        _node_from(child, f"{where}.children[{i}]") for i, child in enumerate(children)
    )


def _segment_from(value: object, where: str) -> SegmentPattern:
    if isinstance(value, str):
        try:
            return _KEYWORD_SEGMENTS[value]
        except KeyError:
            msg = f"{where}: unknown segment kind {value!r}"
            raise ManifestError(msg) from None

    segment = _expect_mapping(value, where)
    if segment.get("static") is not None:
        return Literal(_expect_str(segment["static"], f"{where}.static"))
    if segment.get("complexWildcard") is not None:
        parts = segment["complexWildcard"]
        if not isinstance(parts, list):
            msg = f"{where}.complexWildcard must be a list, got {type(parts).__name__}"
            raise ManifestError(msg)
        return ComplexWildcard(tuple(
            _part_from(part, f"{where}.complexWildcard[{i}]") for i, part in enumerate(parts)
        ))

    msg = f"{where}: segment needs a 'static' or 'complexWildcard' key"
    raise ManifestError(msg)


def _part_from(value: object, where: str) -> Part:
    if value == "wildcard":
        return Glob()
    part = _expect_mapping(value, where)
    if "static" not in part:
        msg = f"{where}: part must be 'wildcard' or have a 'static' key"
        raise ManifestError(msg)
    return Text(_expect_str(part["static"], f"{where}.static"))


def _expect_mapping(value: object, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        msg = f"{where} must be a mapping, got {type(value).__name__}"
        raise ManifestError(msg)
    return value


def _expect_str(value: object, where: str) -> str:
    if not isinstance(value, str):
        msg = f"{where} must be a string, got {type(value).__name__}"
        raise ManifestError(msg)
    return value


def _flag(node: dict[str, Any], key: str, where: str) -> bool:
    value = node.get(key, False)
    if not isinstance(value, bool):
        msg = f"{where}.{key} must be a boolean, got {type(value).__name__}"
        raise ManifestError(msg)
    return value


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def tree_to_manifest(root: RouteRoot) -> dict[str, Any]:
    """Serialize a route tree into a JSON/YAML-ready mapping."""
    return {
        "terminating": root.terminating,
        "requiresLogin": root.requires_login,
        "children": [_node_to(child) for child in root.children],
    }


def _node_to(node: RouteNode) -> dict[str, Any]:
    return {
        "segment": _segment_to(node.pattern),
        "terminating": node.terminating,
        "requiresLogin": node.requires_login,
        "children": [_node_to(child) for child in node.children],
    }


def _segment_to(pattern: SegmentPattern) -> object:
    match pattern:
        case Literal(text=text):
            return {"static": text}
        case Wildcard():
            return "wildcard"
        case OptionalWildcard():
            return "optionalWildcard"
        case RepeatedWildcard():
            return "repeatedWildcard"
        case ComplexWildcard(parts=parts):
            return {
                "complexWildcard": [
                    {"static": part.text} if isinstance(part, Text) else "wildcard"
                    for part in parts
                ]
            }
        case unreachable:
            assert_never(unreachable)


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


def load_manifest(path: Path) -> RouteRoot:
    """Read a ``.json``, ``.yaml`` or ``.yml`` manifest into a route tree.

    Raises:
        ManifestError: If the file cannot be read, parsed, or converted.

    """
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        msg = f"Cannot read route manifest {path}: {exc}"
        raise ManifestError(msg) from exc
    return tree_from_manifest(data)


def dump_manifest(root: RouteRoot, path: Path) -> None:
    """Write *root* as a manifest; the format follows the file suffix.

    Raises:
        ManifestError: If the file or its parent directories cannot be
            written.

    """
    data = tree_to_manifest(root)
    if path.suffix in _YAML_SUFFIXES:
        text = yaml.safe_dump(data, sort_keys=False)
    else:
        text = json.dumps(data, indent=2) + "\n"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot write route manifest {path}: {exc}"
        raise ManifestError(msg) from exc
