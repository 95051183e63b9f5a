"""Tests for the position and range value types."""

from __future__ import annotations

import pytest

from wsfmt.errors import NonWhitespaceReplacement
from wsfmt.positions import (
    Change,
    ChangePosition,
    ResultRange,
    SourcePosition,
    TextRange,
    is_whitespace,
)


class TestWhitespace:
    def test_accepts_the_four_characters(self):
        assert is_whitespace(" \t\r\n")

    def test_empty_is_whitespace(self):
        assert is_whitespace("")

    @pytest.mark.parametrize("text", ["a", " x ", "\f", "\v", "\u00a0", "\u2028"])
    def test_rejects_everything_else(self, text):
        assert not is_whitespace(text)


class TestTextRange:
    def test_empty(self):
        assert TextRange(3, 3).empty
        assert len(TextRange(3, 7)) == 4

    def test_start_after_end(self):
        with pytest.raises(ValueError):
            TextRange(2, 1)

    def test_negative_start(self):
        with pytest.raises(ValueError):
            TextRange(-1, 1)


class TestChange:
    def test_properties(self):
        change = Change(TextRange(1, 3), "\n\t\t")
        assert change.start == 1
        assert change.end == 3
        assert change.length == 3

    def test_rejects_non_whitespace_replacement(self):
        with pytest.raises(NonWhitespaceReplacement):
            Change(TextRange(0, 1), " x")

    def test_equality_is_structural(self):
        assert Change(TextRange(0, 1), " ") == Change(TextRange(0, 1), " ")


class TestPositions:
    def test_change_position_bounds(self):
        change = Change(TextRange(0, 1), "  ")
        assert ChangePosition(change, 0).is_start
        assert ChangePosition(change, 2).is_end
        with pytest.raises(ValueError):
            ChangePosition(change, 3)
        with pytest.raises(ValueError):
            ChangePosition(change, -1)

    def test_empty_replacement_is_both_start_and_end(self):
        position = ChangePosition(Change(TextRange(4, 5), ""), 0)
        assert position.is_start
        assert position.is_end

    def test_shifted(self):
        change = Change(TextRange(0, 1), "\n\n\n")
        assert SourcePosition(4).shifted(2) == SourcePosition(6)
        assert ChangePosition(change, 1).shifted(2) == ChangePosition(change, 3)

    def test_range_between(self):
        assert ResultRange.between(1, 4) == ResultRange(SourcePosition(1), SourcePosition(4))
