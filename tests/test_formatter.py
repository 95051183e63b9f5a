"""Tests for the whitespace formatting policy."""

from __future__ import annotations

import pytest

from wsfmt.config import FormatConfig
from wsfmt.errors import Severity
from wsfmt.formatter import WhitespaceFormatter, explain
from wsfmt.source import SourceText


def fmt(source: str, **options) -> str:
    return WhitespaceFormatter(FormatConfig(**options)).format(source)


class TestFormatterLines:
    def test_already_formatted(self):
        source = "a\n    b\n"
        assert fmt(source) == source

    def test_trailing_whitespace(self):
        assert fmt("a  \nb\n") == "a\nb\n"

    def test_blank_lines_are_capped(self):
        assert fmt("a\n\n\n\n\nb\n") == "a\n\n\nb\n"

    def test_blank_lines_cap_zero(self):
        assert fmt("a\n\n\nb\n", max_blank_lines=0) == "a\nb\n"

    def test_blank_lines_with_whitespace_are_cleaned(self):
        assert fmt("a\n  \n\t\nb\n") == "a\n\n\nb\n"

    def test_line_endings_normalized(self):
        assert fmt("a\r\nb\rc\n") == "a\nb\nc\n"

    def test_crlf_output(self):
        assert fmt("a\nb\n", line_ending="crlf") == "a\r\nb\r\n"

    def test_leading_blank_lines_removed(self):
        assert fmt("\n\n  a\n") == "  a\n"


class TestFormatterIndentation:
    def test_tabs_to_spaces(self):
        assert fmt("if x:\n\tpass\n") == "if x:\n    pass\n"

    def test_tab_width(self):
        assert fmt("a\n\tb\n", tab_width=2) == "a\n  b\n"

    def test_mixed_indentation_keeps_visual_width(self):
        assert fmt("a\n \tb\n") == "a\n    b\n"

    def test_spaces_to_tabs(self):
        assert fmt("a\n      b\n", indent_style="tabs") == "a\n\t  b\n"

    def test_keep_indentation(self):
        assert fmt("a\n\t b  \n", indent_style="keep") == "a\n\t b\n"

    def test_first_line_indentation(self):
        assert fmt("\ta\n") == "    a\n"


class TestFormatterFileEdges:
    def test_final_newline_added(self):
        assert fmt("a") == "a\n"

    def test_trailing_whitespace_at_end(self):
        assert fmt("a \t \n\n") == "a\n"

    def test_final_newline_disabled(self):
        assert fmt("a\n\n", final_newline=False) == "a"

    @pytest.mark.parametrize("source", ["", " ", " \n \n", "\r\n"])
    def test_blank_files_become_empty(self, source):
        assert fmt(source) == ""


class TestFormatterSpaces:
    def test_inner_spaces_kept_by_default(self):
        assert fmt("a   b\n") == "a   b\n"

    def test_collapse_spaces(self):
        assert fmt("a   b\tc\n", collapse_spaces=True) == "a b c\n"

    def test_non_whitespace_untouched(self):
        source = "x\u00a0\u00a0y\f\n"
        assert fmt(source) == source


class TestFormatterPlan:
    def test_adjacent_edits_merge_into_one_change(self):
        edits = WhitespaceFormatter(FormatConfig(max_blank_lines=1)).plan(
            "a  \r\n\r\n\r\n\r\n  b\n"
        )
        assert len(edits) == 1
        assert edits.render() == "a\n\n  b\n"

    def test_trailing_space_line_ending_and_indent_merge(self):
        edits = WhitespaceFormatter().plan("a \r\n\tb\n")
        assert len(edits) == 1
        (change,) = edits.changes
        assert (change.start, change.end, change.replacement) == (1, 5, "\n    ")

    def test_no_changes_for_clean_text(self):
        assert len(WhitespaceFormatter().plan("a\nb\n")) == 0

    def test_format_is_idempotent(self):
        source = "  x \r\n\n\n\n\ty\t\r\n z  "
        once = fmt(source)
        assert fmt(once) == once


class TestExplain:
    def test_describes_changes(self):
        source = "a  \nb"
        edits = WhitespaceFormatter().plan(source)
        notes = explain(edits, SourceText(source, "<test>"))
        assert [n.message for n in notes] == ["remove '  '", "insert '\\n'"]
        assert all(n.severity == Severity.NOTE for n in notes)
        assert all(n.code == "N001" for n in notes)
        assert notes[0].labels[0].span.start_col == 2

    def test_replacement(self):
        source = "a\r\nb\n"
        notes = explain(WhitespaceFormatter().plan(source), SourceText(source))
        assert [n.message for n in notes] == ["replace '\\r\\n' with '\\n'"]
