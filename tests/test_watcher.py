"""Tests for pathgate.routes.watcher — change filtering and hot reloads."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pathgate.config import PathgateConfig
from pathgate.observability import EventLog, MatchCollector, ReloadFailed, TreeLoaded
from pathgate.routes.scanner import build_table
from pathgate.routes.watcher import RoutesWatcher, is_relevant
from pathgate.table import Access
from tests.conftest import make_routes


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def config(project: Path) -> PathgateConfig:
    """A PathgateConfig that scans the project's routes directory."""
    return PathgateConfig(root=project)


@pytest.fixture
def manifest_config(tmp_path: Path) -> PathgateConfig:
    """A PathgateConfig that loads routes from a JSON manifest."""
    manifest = {"children": [{"segment": {"static": "home"}, "terminating": True}]}
    (tmp_path / "routes.json").write_text(json.dumps(manifest))
    return PathgateConfig(root=tmp_path, manifest="routes.json")


# ---------------------------------------------------------------------------
# is_relevant
# ---------------------------------------------------------------------------


class TestIsRelevant:
    def test_page_under_routes(self, config: PathgateConfig) -> None:
        path = config.routes_path / "users" / "[id]" / "+page.svelte"
        assert is_relevant(path, config) is True

    def test_routes_dir_itself(self, config: PathgateConfig) -> None:
        assert is_relevant(config.routes_path, config) is True

    def test_outside_routes(self, config: PathgateConfig) -> None:
        assert is_relevant(config.root / "src" / "lib" / "util.ts", config) is False
        assert is_relevant(config.root / "pathgate.yaml", config) is False

    def test_manifest_only(self, manifest_config: PathgateConfig) -> None:
        assert is_relevant(manifest_config.root / "routes.json", manifest_config) is True
        assert is_relevant(manifest_config.root / "other.json", manifest_config) is False
        assert is_relevant(manifest_config.routes_path / "+page.svelte", manifest_config) is False


# ---------------------------------------------------------------------------
# RoutesWatcher.reload
# ---------------------------------------------------------------------------


class TestReload:
    def test_picks_up_new_route(self, config: PathgateConfig) -> None:
        table = build_table(config)
        watcher = RoutesWatcher(config, table)
        assert table.check("/blog") is Access.NO_MATCH

        make_routes(config.routes_path, "blog/+page.svelte")
        assert watcher.reload() is True
        assert watcher.reload_count == 1
        assert table.check("/blog") is Access.PUBLIC

    def test_records_load_event(self, config: PathgateConfig) -> None:
        collector = MatchCollector(EventLog())
        table = build_table(config, collector=collector)
        RoutesWatcher(config, table).reload()
        assert len(collector.log.query(event_type=TreeLoaded)) == 2

    def test_failure_keeps_previous_tree(
        self,
        manifest_config: PathgateConfig,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        collector = MatchCollector(EventLog())
        table = build_table(manifest_config, collector=collector)
        watcher = RoutesWatcher(manifest_config, table)

        (manifest_config.root / "routes.json").write_text("{broken")
        assert watcher.reload() is False
        assert watcher.reload_count == 0
        assert table.check("/home") is Access.PUBLIC

        assert "Route reload error" in capsys.readouterr().err
        (event,) = collector.log.query(event_type=ReloadFailed)
        assert event.source == str(manifest_config.root / "routes.json")

    def test_failure_without_collector(
        self,
        manifest_config: PathgateConfig,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        table = build_table(manifest_config)
        (manifest_config.root / "routes.json").write_text("[]")
        assert RoutesWatcher(manifest_config, table).reload() is False
        assert "must be a mapping" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Background thread
# ---------------------------------------------------------------------------


class TestWatcherThread:
    def test_start_and_stop(self, config: PathgateConfig) -> None:
        watcher = RoutesWatcher(config, build_table(config))
        assert watcher.is_running is False
        watcher.start()
        try:
            assert watcher.is_running is True
        finally:
            watcher.stop()
        assert watcher.is_running is False
