"""Pathgate configuration.

PathgateConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PathgateConfig:
    """Configuration for building and serving a route table.

    Attributes:
        root: Project root directory.  Always resolved to an absolute path
              on construction.
        routes_dir: SvelteKit-style routes directory, relative to root.
        manifest: Optional JSON/YAML route manifest, relative to root.  When
            set, the tree is loaded from it instead of scanning routes_dir.
        login_groups: Route group directory names (e.g. ``(protected)``)
            whose pages require login.
        page_pattern: Regex for file names that make a directory a route.
        max_events: Capacity of the observability event log.

    """

    root: Path = field(default_factory=Path.cwd)
    routes_dir: str = "src/routes"
    manifest: str | None = None
    login_groups: tuple[str, ...] = ("(protected)",)
    page_pattern: str = r"\+page(|@.*)\.svelte"
    max_events: int = 10_000

    def __post_init__(self) -> None:
        # Resolve root to absolute so that watchfiles (which returns
        # absolute paths) can be compared via Path.relative_to().
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if not isinstance(self.login_groups, tuple):
            object.__setattr__(self, "login_groups", tuple(self.login_groups))

    @property
    def routes_path(self) -> Path:
        """Absolute path to the routes directory."""
        return self.root / self.routes_dir

    @property
    def manifest_path(self) -> Path | None:
        """Absolute path to the manifest, or None when scanning routes."""
        if self.manifest is None:
            return None
        return self.root / self.manifest
