"""Tests for pathgate.observability — route check and reload events."""

import threading

import pytest

from pathgate.observability.collector import MatchCollector
from pathgate.observability.events import (
    MatchEvaluated,
    ReloadFailed,
    TreeLoaded,
    now_ns,
)
from pathgate.observability.log import EventLog


def _match(path: str, access: str = "public") -> MatchEvaluated:
    return MatchEvaluated(
        path=path, access=access, duration_ms=0.01, timestamp_ns=now_ns(),  # type: ignore[arg-type]
    )


# ---------------------------------------------------------------------------
# EventLog
# ---------------------------------------------------------------------------


class TestEventLog:
    """Tests for the event log store."""

    def test_append_and_len(self) -> None:
        log = EventLog()
        assert len(log) == 0
        log.append(_match("/a"))
        assert len(log) == 1

    def test_max_events_enforced(self) -> None:
        log = EventLog(max_events=5)
        for i in range(10):
            log.append(_match(f"/{i}"))
        assert len(log) == 5
        assert log.recent(1)[0].path == "/9"

    def test_recent(self) -> None:
        log = EventLog()
        for i in range(5):
            log.append(_match(f"/{i}"))
        recent = log.recent(3)
        assert [e.path for e in recent] == ["/2", "/3", "/4"]

    def test_recent_zero_or_negative(self) -> None:
        log = EventLog()
        for i in range(3):
            log.append(_match(f"/{i}"))
        assert log.recent(0) == []
        assert log.recent(-1) == []

    def test_recent_more_than_stored(self) -> None:
        log = EventLog()
        log.append(_match("/a"))
        assert [e.path for e in log.recent(5)] == ["/a"]

    def test_query_by_type(self) -> None:
        log = EventLog()
        log.append(_match("/a"))
        log.append(TreeLoaded(
            source="src/routes", kind="routes", node_count=4,
            duration_ms=2.0, timestamp_ns=now_ns(),
        ))
        log.append(_match("/b"))

        results = log.query(event_type=MatchEvaluated)
        assert len(results) == 2
        assert all(isinstance(r, MatchEvaluated) for r in results)

    def test_query_newest_first_with_limit(self) -> None:
        log = EventLog()
        for i in range(5):
            log.append(_match(f"/{i}"))
        results = log.query(limit=2)
        assert [e.path for e in results] == ["/4", "/3"]

    def test_query_by_path_or_source(self) -> None:
        log = EventLog()
        log.append(_match("/docs/api"))
        log.append(_match("/blog/post"))
        log.append(ReloadFailed(source="/srv/docs.json", error="boom", timestamp_ns=now_ns()))

        results = log.query(path="docs")
        assert len(results) == 2
        assert isinstance(results[0], ReloadFailed)
        assert results[1].path == "/docs/api"

    def test_query_by_access(self) -> None:
        log = EventLog()
        log.append(_match("/a", "public"))
        log.append(_match("/b", "malformed"))
        log.append(ReloadFailed(source="routes.json", error="boom", timestamp_ns=now_ns()))
        log.append(_match("/c", "malformed"))

        results = log.query(access="malformed")
        assert [e.path for e in results] == ["/c", "/b"]

    def test_query_since(self) -> None:
        log = EventLog()
        log.append(MatchEvaluated(path="/old", access="public", duration_ms=0.0, timestamp_ns=100))
        log.append(MatchEvaluated(path="/new", access="public", duration_ms=0.0, timestamp_ns=200))
        results = log.query(since_ns=150)
        assert [e.path for e in results] == ["/new"]

    def test_clear(self) -> None:
        log = EventLog()
        for i in range(3):
            log.append(_match(f"/{i}"))
        cleared = log.clear()
        assert cleared == 3
        assert len(log) == 0

    def test_stats(self) -> None:
        log = EventLog(max_events=100)
        log.append(_match("/a", "public"))
        log.append(_match("/b", "no_match"))
        log.append(_match("/c", "public"))
        log.append(TreeLoaded(
            source="src/routes", kind="routes", node_count=4,
            duration_ms=2.0, timestamp_ns=now_ns(),
        ))

        stats = log.stats()
        assert stats["total"] == 4
        assert stats["max_events"] == 100
        assert stats["by_type"] == {"MatchEvaluated": 3, "TreeLoaded": 1}
        assert stats["by_access"] == {"public": 2, "no_match": 1}

    def test_thread_safety(self) -> None:
        """Concurrent appends should not lose events."""
        log = EventLog(max_events=50_000)
        errors: list[Exception] = []

        def worker(start: int) -> None:
            try:
                for i in range(1000):
                    log.append(_match(f"/{start}/{i}"))
            except Exception as exc:
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(log) == 10_000


# ---------------------------------------------------------------------------
# MatchCollector
# ---------------------------------------------------------------------------


class TestMatchCollector:
    def test_record_match(self) -> None:
        collector = MatchCollector()
        collector.record_match("/users/42", "login_required", duration_ms=0.2)

        (event,) = collector.log.query(event_type=MatchEvaluated)
        assert event.path == "/users/42"
        assert event.access == "login_required"
        assert event.duration_ms == 0.2

    def test_record_load(self) -> None:
        collector = MatchCollector()
        collector.record_load("routes.json", "manifest", node_count=7, duration_ms=1.5)

        (event,) = collector.log.query(event_type=TreeLoaded)
        assert event.source == "routes.json"
        assert event.kind == "manifest"
        assert event.node_count == 7

    def test_record_reload_failure(self) -> None:
        collector = MatchCollector()
        collector.record_reload_failure("routes.json", "bad segment")

        (event,) = collector.log.query(event_type=ReloadFailed)
        assert event.error == "bad segment"

    def test_collector_with_custom_log(self) -> None:
        log = EventLog(max_events=50)
        collector = MatchCollector(log)
        collector.record_match("/a", "public")
        assert len(log) == 1
        assert collector.log is log


# ---------------------------------------------------------------------------
# Event dataclasses
# ---------------------------------------------------------------------------


class TestEventDataclasses:
    def test_frozen(self) -> None:
        event = _match("/a")
        with pytest.raises(AttributeError):
            event.path = "/b"  # type: ignore[misc]

    def test_now_ns_monotonic(self) -> None:
        t1 = now_ns()
        t2 = now_ns()
        assert t2 >= t1
