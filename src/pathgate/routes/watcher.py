"""Routes watcher — rebuilds the route table when routes change on disk.

Monitors the routes directory (or the manifest file, when one is configured).
On any relevant change the tree is rebuilt from scratch and swapped into the
``RouteTable``.  A rebuild that fails leaves the previous tree installed.
"""

from __future__ import annotations

import sys
import threading
import time
from pathlib import Path
from typing import TYPE_CHECKING

from pathgate._errors import PathgateError
from pathgate.routes.scanner import load_tree

if TYPE_CHECKING:
    from pathgate.config import PathgateConfig
    from pathgate.table import RouteTable


def is_relevant(path: Path, config: PathgateConfig) -> bool:
    """Return True if a change to *path* can affect the route tree."""
    manifest_path = config.manifest_path
    if manifest_path is not None:
        return path == manifest_path

    try:
        path.relative_to(config.routes_path)
    except ValueError:
        return False
    return True


class RoutesWatcher:
    """Watches route sources and hot-swaps the route table.

    Uses watchfiles for efficient filesystem monitoring.  The watch loop
    runs in a background thread; each batch of relevant changes triggers
    one synchronous ``reload()``.

    Args:
        config: Where the routes live.
        table: The table to keep up to date.

    """

    def __init__(self, config: PathgateConfig, table: RouteTable) -> None:
        self._config = config
        self._table = table
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._reloads = 0

    @property
    def is_running(self) -> bool:
        """Whether the watcher background thread is active."""
        return self._thread is not None and self._thread.is_alive()

    @property
    def reload_count(self) -> int:
        """Number of successful reloads since construction."""
        return self._reloads

    def start(self) -> None:
        """Start watching for changes in a background thread."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop,
            name="pathgate-watcher",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the watcher to stop and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    def reload(self) -> bool:
        """Rebuild the tree and install it.  Returns False if the rebuild failed.

        Failures are recorded as ``ReloadFailed`` events (when the table has
        a collector) and reported on stderr; the old tree stays in place.

        """
        start = time.perf_counter()
        try:
            tree, source, kind = load_tree(self._config)
        except PathgateError as exc:
            collector = self._table.collector
            if collector is not None:
                collector.record_reload_failure(self._table.source, str(exc))
            print(f"  Route reload error: {exc}", file=sys.stderr)
            return False

        self._table.replace(
            tree,
            source=source,
            kind=kind,
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        self._reloads += 1
        return True

    def _watch_paths(self) -> list[Path]:
        manifest_path = self._config.manifest_path
        if manifest_path is not None:
            return [manifest_path.parent]
        routes_path = self._config.routes_path
        # watchfiles needs an existing path; catch the routes dir being created
        return [routes_path if routes_path.is_dir() else self._config.root]

    def _watch_loop(self) -> None:
        """Background thread: run watchfiles and reload on relevant changes."""
        from watchfiles import watch

        for raw_changes in watch(
            *self._watch_paths(),
            stop_event=self._stop_event,
            debounce=300,
            step=100,
        ):
            if any(is_relevant(Path(path_str), self._config) for _, path_str in raw_changes):
                self.reload()
