"""Splits text into whitespace gaps between runs of other characters."""

from __future__ import annotations

from dataclasses import dataclass

from wsfmt.positions import WHITESPACE, ResultRange


@dataclass(frozen=True)
class Gap:
    """A maximal run of space, tab, CR and LF in the source."""

    start: int
    end: int
    at_start: bool
    at_end: bool

    @property
    def range(self) -> ResultRange:
        return ResultRange.between(self.start, self.end)


class GapScanner:
    """Finds every whitespace gap of a source text, in order."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.gaps: list[Gap] = []

    def scan(self) -> list[Gap]:
        while self.pos < len(self.source):
            if self.source[self.pos] in WHITESPACE:
                self._scan_gap()
            else:
                self._skip_text()
        return self.gaps

    def _scan_gap(self) -> None:
        start = self.pos
        while self.pos < len(self.source) and self.source[self.pos] in WHITESPACE:
            self.pos += 1
        self.gaps.append(
            Gap(start, self.pos, at_start=start == 0, at_end=self.pos == len(self.source))
        )

    def _skip_text(self) -> None:
        while self.pos < len(self.source) and self.source[self.pos] not in WHITESPACE:
            self.pos += 1
