"""Pathgate CLI — pathgate check / pathgate tree / pathgate export.

Entry point for the ``pathgate`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, NoReturn

_ACCESS_LABELS: dict[str, str] = {
    "no_match": "no match",
    "public": "public",
    "login_required": "login",
    "malformed": "malformed",
}


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the pathgate CLI."""
    parser = argparse.ArgumentParser(
        prog="pathgate",
        description="Route matching and login gating for SvelteKit-style route trees.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # pathgate check
    check_parser = subparsers.add_parser(
        "check",
        help="Report whether paths match a route and need login",
    )
    check_parser.add_argument("paths", nargs="+", help="URL paths to check")
    check_parser.add_argument(
        "--stats", action="store_true", help="Print a summary of outcomes to stderr",
    )
    _add_source_args(check_parser)

    # pathgate tree
    tree_parser = subparsers.add_parser(
        "tree",
        help="Print the route tree",
    )
    tree_parser.add_argument(
        "--pretty", action="store_true", help="One route per line, indented",
    )
    _add_source_args(tree_parser)

    # pathgate export
    export_parser = subparsers.add_parser(
        "export",
        help="Write the route tree as a JSON or YAML manifest",
    )
    export_parser.add_argument("output", help="Manifest file (.json, .yaml or .yml)")
    _add_source_args(export_parser)

    return parser


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--root", default=".", help="Project root directory")
    parser.add_argument("--routes-dir", default=None, help="Routes directory (relative to root)")
    parser.add_argument("--manifest", default=None, help="Route manifest (relative to root)")


def _get_version() -> str:
    """Get the package version."""
    from pathgate import __version__

    return __version__


def _print_stats(stats: dict[str, Any]) -> None:
    by_access: dict[str, int] = stats["by_access"]
    detail = ", ".join(
        f"{count} {_ACCESS_LABELS[access]}" for access, count in sorted(by_access.items())
    )
    print(f"  {sum(by_access.values())} checks: {detail}", file=sys.stderr)


def _fail(exc: Exception) -> NoReturn:
    print(f"pathgate: {exc}", file=sys.stderr)
    sys.exit(2)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from pathgate._errors import PathgateError
    from pathgate.config_loader import load_config
    from pathgate.routes.scanner import build_table

    try:
        config = load_config(
            Path(args.root),
            routes_dir=args.routes_dir,
            manifest=args.manifest,
        )
        collector = None
        if getattr(args, "stats", False):
            from pathgate.observability import EventLog, MatchCollector

            collector = MatchCollector(EventLog(max_events=config.max_events))
        table = build_table(config, collector=collector)
    except PathgateError as exc:
        _fail(exc)

    if args.command == "check":
        width = max(len(p) for p in args.paths)
        all_matched = True
        for path in args.paths:
            access = table.check(path)
            all_matched = all_matched and access.matched
            print(f"{path:<{width}}  {_ACCESS_LABELS[access.value]}")
        if collector is not None:
            _print_stats(collector.log.stats())
        sys.exit(0 if all_matched else 1)
    elif args.command == "tree":
        print(table.render(pretty=args.pretty))
    elif args.command == "export":
        from pathgate.routes.manifest import dump_manifest

        output = Path(args.output)
        try:
            dump_manifest(table.tree, output)
        except PathgateError as exc:
            _fail(exc)
        print(f"Wrote {output}", file=sys.stderr)


if __name__ == "__main__":
    main()
