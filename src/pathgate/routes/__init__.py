"""Route tree construction from routes directories and manifests.

Public API::

    from pathgate.routes import scan_routes, load_manifest, dump_manifest

    tree = scan_routes(Path("src/routes"), login_groups=("(protected)",))
    dump_manifest(tree, Path("routes.json"))
    same_tree = load_manifest(Path("routes.json"))
"""

from pathgate.routes.manifest import (
    dump_manifest,
    load_manifest,
    tree_from_manifest,
    tree_to_manifest,
)
from pathgate.routes.scanner import (
    build_table,
    classify_segment,
    load_tree,
    parse_complex,
    scan_routes,
    segment_for,
)

__all__ = [
    "build_table",
    "classify_segment",
    "dump_manifest",
    "load_manifest",
    "load_tree",
    "parse_complex",
    "scan_routes",
    "segment_for",
    "tree_from_manifest",
    "tree_to_manifest",
]
