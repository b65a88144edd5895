"""Pathgate — route matching and login gating for declarative route trees.

Given a URL path, answers: does a route exist, and does it require login?
Route trees use SvelteKit's segment conventions (literals, ``[param]``,
``[[optional]]``, ``[...rest]`` and ``v[major]-[minor]`` globs) and can be
scanned from a ``routes/`` directory or loaded from a JSON/YAML manifest.

Quick start::

    from pathlib import Path
    from pathgate import RouteTable, scan_routes

    table = RouteTable(scan_routes(Path("src/routes"), login_groups=("(protected)",)))
    table.check("/account")      # Access.LOGIN_REQUIRED
    table.check("/about")        # Access.PUBLIC
    table.check("/nope")         # Access.NO_MATCH

The matching core (``pathgate.matching``) is pure: no I/O, no mutation,
safe to share across threads.

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0.dev0"
__all__ = [
    "Access",
    "PathgateConfig",
    "RouteNode",
    "RouteRoot",
    "RouteTable",
    "__version__",
    "load_config",
    "load_manifest",
    "scan_routes",
]

_LAZY: dict[str, str] = {
    "Access": "pathgate.table",
    "RouteTable": "pathgate.table",
    "PathgateConfig": "pathgate.config",
    "load_config": "pathgate.config_loader",
    "RouteNode": "pathgate.matching.tree",
    "RouteRoot": "pathgate.matching.tree",
    "load_manifest": "pathgate.routes.manifest",
    "scan_routes": "pathgate.routes.scanner",
}


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import pathgate`` fast while providing a clean top-level API.
    """
    module_name = _LAZY.get(name)
    if module_name is not None:
        import importlib

        return getattr(importlib.import_module(module_name), name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
