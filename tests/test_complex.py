"""Tests for pathgate.matching.complex — intra-segment glob matching."""

from pathgate.matching.complex import complex_match
from pathgate.matching.segments import Glob, Text


class TestEmptyParts:
    def test_matches_empty_text(self) -> None:
        assert complex_match([], "") is True

    def test_rejects_non_empty_text(self) -> None:
        assert complex_match([], "x") is False


class TestGlob:
    def test_lone_glob_matches_anything(self) -> None:
        for text in ("", "a", "anything at all", "%20"):
            assert complex_match([Glob()], text) is True

    def test_glob_between_literals(self) -> None:
        assert complex_match([Text("ab"), Glob(), Text("z")], "abXYz") is True

    def test_glob_may_consume_nothing(self) -> None:
        assert complex_match([Text("ab"), Glob(), Text("z")], "abz") is True

    def test_glob_then_literal_requires_suffix(self) -> None:
        assert complex_match([Glob(), Text(".json")], "data.json") is True
        assert complex_match([Glob(), Text(".json")], "data.yaml") is False

    def test_backtracks_past_early_literal_occurrence(self) -> None:
        # The first "-" is not the one that lets the rest match
        parts = [Text("v"), Glob(), Text("-"), Text("rc")]
        assert complex_match(parts, "v1-2-rc") is True

    def test_adjacent_globs(self) -> None:
        parts = [Glob(), Glob(), Text("x")]
        assert complex_match(parts, "abcx") is True
        assert complex_match(parts, "abc") is False

    def test_two_globs_with_separator(self) -> None:
        parts = [Text("v"), Glob(), Text("-"), Glob()]
        assert complex_match(parts, "v1-2") is True
        assert complex_match(parts, "v1-") is True
        assert complex_match(parts, "v12") is False


class TestText:
    def test_consecutive_literals(self) -> None:
        assert complex_match([Text("ab"), Text("z")], "abz") is True

    def test_consecutive_literals_mismatch(self) -> None:
        assert complex_match([Text("ab"), Text("z")], "abc") is False

    def test_literal_must_consume_whole_text(self) -> None:
        assert complex_match([Text("ab")], "abc") is False

    def test_literal_is_case_sensitive(self) -> None:
        assert complex_match([Text("AB"), Glob()], "abc") is False

    def test_accepts_tuples(self) -> None:
        assert complex_match((Text("a"), Glob()), "abc") is True
