"""Edit contract violations and Rust-style colored diagnostic rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wsfmt.source import SourceText, Span


class Severity(Enum):
    ERROR = "error"  # a broken edit contract
    NOTE = "note"  # a planned change


_COLORS = {
    Severity.ERROR: "\033[1;31m",  # bold red
    Severity.NOTE: "\033[1;36m",  # bold cyan
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass(frozen=True)
class DiagnosticLabel:
    """Underlines the source range a diagnostic is about."""

    span: Span
    message: str = ""


@dataclass(frozen=True)
class Suggestion:
    """Whitespace the range would become."""

    message: str
    replacement: str


@dataclass
class Diagnostic:
    """One error or planned change, ready for ``DiagnosticRenderer``."""

    severity: Severity
    code: str
    message: str
    labels: list[DiagnosticLabel] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


def visible(text: str) -> str:
    """Spell out whitespace so it can be read in a terminal."""
    return repr(text)


class DiagnosticRenderer:
    """Renders diagnostics against an in-memory source in Rust-style format."""

    def __init__(self, source: SourceText, *, color: bool = True) -> None:
        self.source = source
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diag: Diagnostic) -> str:
        lines: list[str] = []
        sev = diag.severity
        color = _COLORS[sev]

        # Header: error[E003]: message
        lines.append(
            f"{self._c(color)}{sev.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )

        for label in diag.labels:
            span = label.span
            lines.append(f"  {self._c(_BLUE)}-->{self._c(_RESET)} {span}")
            gutter = f"{span.start_line:>4}"
            lines.append(f"  {self._c(_BLUE)}   |{self._c(_RESET)}")

            source_line = self.source.line_at(span.start_line)
            lines.append(
                f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)} {source_line}"
            )

            # Carets only make sense on a single line; multi-line spans get the first line.
            if span.start_line == span.end_line:
                caret_len = max(1, span.end_col - span.start_col + 1)
            else:
                caret_len = max(1, len(source_line) - span.start_col + 1)
            padding = " " * (span.start_col - 1)
            lines.append(
                f"  {self._c(_BLUE)}   |{self._c(_RESET)} "
                f"{padding}{self._c(color)}{'^' * caret_len}{self._c(_RESET)}"
            )

            if label.message:
                lines.append(
                    f"  {self._c(_BLUE)}   |{self._c(_RESET)}   "
                    f"{self._c(color)}{label.message}{self._c(_RESET)}"
                )

        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        for suggestion in diag.suggestions:
            lines.append(
                f"  {self._c(_BLUE)}try:{self._c(_RESET)} {suggestion.message}: "
                f"{suggestion.replacement}"
            )

        return "\n".join(lines)


# ── Edit contract violations ───────────────────────────────────


class EditError(AssertionError):
    """A caller broke the edit contract.

    These are programming errors in the formatting policy, not runtime
    conditions: the edit set is left exactly as it was and nothing retries.
    """

    code = "E000"

    def __init__(
        self, message: str, *, start: int | None = None, end: int | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.start = start
        self.end = end if end is not None else start

    def diagnostic(self, source: SourceText) -> Diagnostic:
        labels = []
        if self.start is not None:
            span = source.span(self.start, self.end)
            labels.append(DiagnosticLabel(span=span))
        return Diagnostic(
            severity=Severity.ERROR,
            code=self.code,
            message=self.message,
            labels=labels,
        )


class NonWhitespaceReplacement(EditError):
    code = "E001"

    def __init__(self, text: str) -> None:
        super().__init__(f"replacement {visible(text)} contains non-whitespace")
        self.text = text


class NonWhitespaceSource(EditError):
    code = "E002"

    def __init__(self, start: int, end: int) -> None:
        super().__init__(
            f"source range [{start}, {end}) contains non-whitespace",
            start=start,
            end=end,
        )


class IntersectingChange(EditError):
    code = "E003"


class StaleChange(EditError):
    code = "E004"


class InvalidRange(EditError):
    code = "E005"
