"""Coordinate system for edited text.

A position in the edited result is either an offset into the untouched
source (``SourcePosition``) or an offset into the replacement text of a
change (``ChangePosition``). The boundary between a change and the source
around it can be spelled both ways; ``EditSet.normalize`` picks the change
spelling whenever one exists.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from wsfmt.errors import NonWhitespaceReplacement

# Only these four characters count as whitespace; str.isspace() is broader.
WHITESPACE = frozenset(" \t\r\n")
LINE_BREAK_CHARS = frozenset("\r\n")


def is_whitespace(text: str) -> bool:
    """True if ``text`` consists solely of space, tab, CR and LF."""
    return all(ch in WHITESPACE for ch in text)


@dataclass(frozen=True)
class TextRange:
    """A span of source text, inclusive start and exclusive end."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"invalid text range [{self.start}, {self.end})")

    @property
    def empty(self) -> bool:
        return self.start == self.end

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Change:
    """Replacement of a whitespace-only source span by whitespace."""

    range: TextRange
    replacement: str

    def __post_init__(self) -> None:
        if not is_whitespace(self.replacement):
            raise NonWhitespaceReplacement(self.replacement)

    @property
    def start(self) -> int:
        return self.range.start

    @property
    def end(self) -> int:
        return self.range.end

    @property
    def length(self) -> int:
        """Length of the replacement text."""
        return len(self.replacement)


@dataclass(frozen=True)
class SourcePosition:
    offset: int

    def shifted(self, delta: int) -> SourcePosition:
        return SourcePosition(self.offset + delta)


@dataclass(frozen=True)
class ChangePosition:
    change: Change
    offset: int

    def __post_init__(self) -> None:
        if not 0 <= self.offset <= self.change.length:
            raise ValueError(
                f"offset {self.offset} outside replacement of length {self.change.length}"
            )

    @property
    def is_start(self) -> bool:
        return self.offset == 0

    @property
    def is_end(self) -> bool:
        return self.offset == self.change.length

    def shifted(self, delta: int) -> ChangePosition:
        return ChangePosition(self.change, self.offset + delta)


Position = Union[SourcePosition, ChangePosition]


@dataclass(frozen=True)
class ResultRange:
    """A contiguous span of the edited result.

    The two ends may use different coordinate spaces.
    """

    start: Position
    end: Position

    @classmethod
    def between(cls, start: int, end: int) -> ResultRange:
        """Range between two source offsets."""
        return cls(SourcePosition(start), SourcePosition(end))
