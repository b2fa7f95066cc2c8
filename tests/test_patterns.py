"""Tests for tile name patterns and filters."""

from __future__ import annotations

from pathlib import Path

import pytest

from block_mosaic.patterns import MatchKind, NameFilter, Pattern, read_pattern_file

VALUES = ["TARGET", "target", "_TARGET", "TARGET_", "_TARGET_"]


class TestPatternParse:
    @pytest.mark.parametrize(
        ("text", "kind", "target"),
        [
            ("TARGET", MatchKind.EXACT, "TARGET"),
            ("TARGET*", MatchKind.PREFIX, "TARGET"),
            ("*TARGET", MatchKind.SUFFIX, "TARGET"),
            ("*TARGET*", MatchKind.CONTAINS, "TARGET"),
        ],
    )
    def test_kinds(self, text: str, kind: MatchKind, target: str) -> None:
        assert Pattern.parse(text) == Pattern(kind, target)

    def test_lone_wildcard_matches_everything(self) -> None:
        pat = Pattern.parse("*")
        assert all(pat.matches(v) for v in VALUES + [""])


class TestPatternMatch:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("TARGET", [True, False, False, False, False]),
            ("TARGET*", [True, False, False, True, False]),
            ("*TARGET", [True, False, True, False, False]),
            ("*TARGET*", [True, False, True, True, True]),
        ],
    )
    def test_matches(self, text: str, expected: list[bool]) -> None:
        pat = Pattern.parse(text)
        assert [pat.matches(v) for v in VALUES] == expected


class TestNameFilter:
    def test_no_patterns_allows_all(self) -> None:
        assert NameFilter()("anything")

    def test_exclude(self) -> None:
        f = NameFilter.from_strings(exclude=["*glass*", "tnt"])
        assert not f("red_stained_glass")
        assert not f("tnt")
        assert f("tnt_side")
        assert f("stone")

    def test_require(self) -> None:
        f = NameFilter.from_strings(require=["*_wool", "*_concrete"])
        assert f("red_wool")
        assert f("blue_concrete")
        assert not f("stone")

    def test_exclude_beats_require(self) -> None:
        f = NameFilter.from_strings(exclude=["pink*"], require=["*_wool"])
        assert f("red_wool")
        assert not f("pink_wool")


class TestPatternFile:
    def test_read(self, tmp_path: Path) -> None:
        p = tmp_path / "blacklist.txt"
        p.write_text("# transparent blocks\n*glass*\n\n  tnt  \n*_ore\n", encoding="utf-8")
        assert read_pattern_file(p) == ["*glass*", "tnt", "*_ore"]

    def test_dash_means_none(self) -> None:
        assert read_pattern_file("-") == []
        assert read_pattern_file(None) == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_pattern_file(tmp_path / "missing.txt")
