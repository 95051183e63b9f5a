"""Whitespace formatting policy built on ``EditSet``.

Walks the whitespace gaps of a text and decides, gap by gap, what each one
should become: trailing spaces go, blank lines are capped, line endings and
indentation follow the configuration. Non-whitespace is never touched, so
the formatter works on any text without parsing it.
"""

from __future__ import annotations

import logging

from wsfmt.config import FormatConfig
from wsfmt.edits import EditSet, SearchDirection, SearchKind
from wsfmt.errors import Diagnostic, DiagnosticLabel, Severity, Suggestion, visible
from wsfmt.positions import WHITESPACE, ResultRange
from wsfmt.scanner import Gap, GapScanner
from wsfmt.source import SourceText

logger = logging.getLogger(__name__)


class WhitespaceFormatter:
    """Format the whitespace of a text according to a ``FormatConfig``."""

    def __init__(self, config: FormatConfig | None = None) -> None:
        self.config = config or FormatConfig()

    # ── Public API ─────────────────────────────────────────────

    def format(self, source: str) -> str:
        """Return ``source`` with its whitespace formatted."""
        return self.plan(source).render()

    def plan(self, source: str) -> EditSet:
        """Compute the changes needed to format ``source`` without applying them."""
        edits = EditSet(source)
        for gap in GapScanner(source).scan():
            self._format_gap(edits, gap)

        # Text ending in non-whitespace has no trailing gap to rewrite.
        if self.config.final_newline and source and source[-1] not in WHITESPACE:
            end = len(source)
            edits.add_change(ResultRange.between(end, end), self.config.newline)

        logger.debug(
            "planned %d change(s) over %d character(s)", len(edits), len(source)
        )
        return edits

    # ── Gaps ───────────────────────────────────────────────────

    def _format_gap(self, edits: EditSet, gap: Gap) -> None:
        if gap.at_end:
            keep_newline = self.config.final_newline and not gap.at_start
            self._rewrite(edits, gap.range, self.config.newline if keep_newline else "")
            return

        whole = gap.range
        breaks = edits.count_line_breaks(whole)
        if breaks == 0:
            if gap.at_start:
                self._reindent(edits, whole)
            elif self.config.collapse_spaces:
                self._rewrite(edits, whole, " ")
            return

        first = edits.search(whole, SearchDirection.FRONT_TO_BACK, SearchKind.LINE_BREAK)
        last = edits.search(whole, SearchDirection.BACK_TO_FRONT, SearchKind.LINE_BREAK)
        assert first is not None and last is not None
        after_last = last.position.shifted(1)
        indent = ResultRange(after_last, whole.end)
        indent_text = self._indent_text(edits, indent)

        if gap.at_start:
            self._rewrite(edits, ResultRange(whole.start, after_last), "")
        else:
            keep = min(breaks, self.config.max_blank_lines + 1)
            self._rewrite(edits, ResultRange(whole.start, first.position), "")
            self._rewrite(
                edits, ResultRange(first.position, after_last), self.config.newline * keep
            )
        if indent_text is not None:
            self._rewrite(edits, indent, indent_text)

    def _reindent(self, edits: EditSet, indent: ResultRange) -> None:
        indent_text = self._indent_text(edits, indent)
        if indent_text is not None:
            self._rewrite(edits, indent, indent_text)

    def _indent_text(self, edits: EditSet, indent: ResultRange) -> str | None:
        """Indentation of the same visual width in the configured style."""
        style = self.config.indent_style
        if style == "keep":
            return None
        tab_width = self.config.tab_width
        width = edits.count_simple_spaces(indent, tab_width).visual_width
        if style == "tabs":
            return "\t" * (width // tab_width) + " " * (width % tab_width)
        return " " * width

    def _rewrite(self, edits: EditSet, rng: ResultRange, target: str) -> None:
        if edits.text(rng) != target:
            edits.add_change(rng, target)


def explain(edits: EditSet, source: SourceText) -> list[Diagnostic]:
    """Describe every planned change as a note pointing at the source."""
    notes: list[Diagnostic] = []
    for change in edits.changes:
        original = edits.source[change.start : change.end]
        if change.range.empty:
            message = f"insert {visible(change.replacement)}"
        elif not change.replacement:
            message = f"remove {visible(original)}"
        else:
            message = f"replace {visible(original)} with {visible(change.replacement)}"
        notes.append(
            Diagnostic(
                severity=Severity.NOTE,
                code="N001",
                message=message,
                labels=[
                    DiagnosticLabel(span=source.span(change.start, change.end))
                ],
                suggestions=[
                    Suggestion(message="whitespace", replacement=visible(change.replacement))
                ],
            )
        )
    return notes
