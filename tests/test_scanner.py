"""Tests for the whitespace gap scanner."""

from __future__ import annotations

from wsfmt.positions import ResultRange
from wsfmt.scanner import Gap, GapScanner


def gaps(source: str) -> list[tuple[int, int]]:
    return [(g.start, g.end) for g in GapScanner(source).scan()]


class TestGapScanner:
    def test_empty_source(self):
        assert GapScanner("").scan() == []

    def test_no_whitespace(self):
        assert gaps("abc") == []

    def test_gaps_between_text(self):
        assert gaps("  a b\n\nc ") == [(0, 2), (3, 4), (5, 7), (8, 9)]

    def test_edges_are_flagged(self):
        result = GapScanner(" a ").scan()
        assert result == [Gap(0, 1, at_start=True, at_end=False), Gap(2, 3, at_start=False, at_end=True)]

    def test_whitespace_only(self):
        assert GapScanner(" \r\n\t").scan() == [Gap(0, 4, at_start=True, at_end=True)]

    def test_other_unicode_spaces_are_text(self):
        assert gaps("a\u00a0b\fc") == []

    def test_gap_range(self):
        assert Gap(2, 5, at_start=False, at_end=False).range == ResultRange.between(2, 5)
