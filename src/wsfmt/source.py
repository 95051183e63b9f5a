"""Source text representation and span tracking for diagnostics."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Span:
    """A range within a source file, 1-indexed lines and columns."""

    file: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def __str__(self) -> str:
        return f"{self.file}:{self.start_line}:{self.start_col}"


class SourceText:
    """Immutable text with offset to line/column mapping.

    Lines are split on ``\\n``, ``\\r\\n`` and lone ``\\r`` the same way
    ``EditSet.count_line_breaks`` counts them.
    """

    def __init__(self, content: str, filename: str = "<stdin>") -> None:
        self.content = content
        self.filename = filename
        self._line_starts = [0]
        i = 0
        while i < len(content):
            ch = content[i]
            if ch == "\r" and i + 1 < len(content) and content[i + 1] == "\n":
                i += 1
            if ch in "\r\n":
                self._line_starts.append(i + 1)
            i += 1

    @classmethod
    def from_path(cls, path: Path) -> SourceText:
        # newline="" keeps \r\n intact; offsets must match the raw file.
        with open(path, encoding="utf-8", newline="") as f:
            return cls(f.read(), str(path))

    def __len__(self) -> int:
        return len(self.content)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def location(self, offset: int) -> tuple[int, int]:
        """Return the 1-indexed (line, column) of an offset."""
        offset = max(0, min(offset, len(self.content)))
        index = bisect_right(self._line_starts, offset) - 1
        return index + 1, offset - self._line_starts[index] + 1

    def span(self, start: int, end: int) -> Span:
        """Span covering ``[start, end)``; empty ranges point at ``start``."""
        start_line, start_col = self.location(start)
        if end <= start:
            return Span(self.filename, start_line, start_col, start_line, start_col)
        end_line, end_col = self.location(end - 1)
        return Span(self.filename, start_line, start_col, end_line, end_col)

    def line_at(self, n: int) -> str:
        """Return the 1-indexed line without its terminator, or empty string if out of range."""
        if not 1 <= n <= len(self._line_starts):
            return ""
        start = self._line_starts[n - 1]
        end = self._line_starts[n] if n < len(self._line_starts) else len(self.content)
        return self.content[start:end].rstrip("\r\n")
