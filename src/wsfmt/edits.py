"""Whitespace edits over an immutable source text.

``EditSet`` keeps the source untouched and records changes sorted by start
offset. No two changes overlap or share a boundary: an edit adjacent to an
existing change is merged into it. Read queries walk the edited result
lazily, one fragment at a time, without materializing it.
"""

from __future__ import annotations

import logging
import re
from bisect import bisect_left, bisect_right, insort
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from wsfmt.errors import (
    IntersectingChange,
    InvalidRange,
    NonWhitespaceReplacement,
    NonWhitespaceSource,
    StaleChange,
)
from wsfmt.positions import (
    LINE_BREAK_CHARS,
    WHITESPACE,
    Change,
    ChangePosition,
    Position,
    ResultRange,
    SourcePosition,
    TextRange,
    is_whitespace,
)

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\n|\r")


class SearchKind(Enum):
    NON_WHITESPACE = auto()
    LINE_BREAK = auto()
    BOTH = auto()


class SearchDirection(Enum):
    FRONT_TO_BACK = auto()
    BACK_TO_FRONT = auto()


class FoundKind(Enum):
    NON_WHITESPACE = auto()
    LINE_BREAK = auto()


@dataclass(frozen=True)
class SearchResult:
    position: Position
    kind: FoundKind


@dataclass(frozen=True)
class SpacesCount:
    spaces: int
    tabs: int
    visual_width: int


@dataclass(frozen=True)
class Fragment:
    """Literal text of the edited result, tagged with the position of its first character."""

    text: str
    origin: Position


def _match(ch: str, kind: SearchKind) -> FoundKind | None:
    # Non-whitespace wins over line break when both are requested.
    if kind is not SearchKind.LINE_BREAK and ch not in WHITESPACE:
        return FoundKind.NON_WHITESPACE
    if kind is not SearchKind.NON_WHITESPACE and ch in LINE_BREAK_CHARS:
        return FoundKind.LINE_BREAK
    return None


def _order_key(position: Position) -> tuple[int, int]:
    # Valid only for normalized positions: a source offset never equals
    # a change boundary and never falls inside a change.
    if isinstance(position, ChangePosition):
        return position.change.start, position.offset
    return position.offset, 0


class EditSet:
    """Tracks whitespace changes to ``source`` and renders the result."""

    def __init__(self, source: str) -> None:
        self.source = source
        self._starts: list[int] = []
        self._changes: dict[int, Change] = {}

    def __len__(self) -> int:
        return len(self._starts)

    @property
    def changes(self) -> tuple[Change, ...]:
        """Current changes in source order."""
        return tuple(self._changes[start] for start in self._starts)

    # ── Ordered lookup ─────────────────────────────────────────

    def _floor(self, offset: int) -> Change | None:
        """Change with the greatest start <= offset."""
        i = bisect_right(self._starts, offset)
        return self._changes[self._starts[i - 1]] if i else None

    def _higher(self, offset: int) -> Change | None:
        """Change with the least start > offset."""
        i = bisect_right(self._starts, offset)
        return self._changes[self._starts[i]] if i < len(self._starts) else None

    def _lower(self, offset: int) -> Change | None:
        """Change with the greatest start < offset."""
        i = bisect_left(self._starts, offset)
        return self._changes[self._starts[i - 1]] if i else None

    def _replace(self, removed: list[Change], added: Change) -> None:
        for change in removed:
            del self._starts[bisect_left(self._starts, change.start)]
            del self._changes[change.start]
        insort(self._starts, added.start)
        self._changes[added.start] = added

    # ── Positions ──────────────────────────────────────────────

    def normalize(self, position: Position) -> Position:
        """Rewrite a source offset on a change boundary as a change position."""
        if isinstance(position, ChangePosition):
            return position
        change = self._floor(position.offset)
        if change is not None:
            if change.start == position.offset:
                return ChangePosition(change, 0)
            if change.end == position.offset:
                return ChangePosition(change, change.length)
        return position

    def _resolve(self, position: Position) -> Position:
        """Validate a caller-supplied position and normalize it."""
        if isinstance(position, ChangePosition):
            if self._changes.get(position.change.start) != position.change:
                raise StaleChange(
                    "change is not part of this edit set",
                    start=position.change.start,
                    end=position.change.end,
                )
            return position
        if isinstance(position, SourcePosition):
            offset = position.offset
            if not 0 <= offset <= len(self.source):
                raise InvalidRange(f"offset {offset} outside source of length {len(self.source)}")
            normalized = self.normalize(position)
            if normalized is position:
                change = self._floor(offset)
                if change is not None and change.end > offset:
                    raise IntersectingChange(
                        f"offset {offset} lies inside change [{change.start}, {change.end})",
                        start=change.start,
                        end=change.end,
                    )
            return normalized
        raise TypeError(f"unsupported position {position!r}")

    def _resolve_range(self, rng: ResultRange) -> tuple[Position, Position]:
        start = self._resolve(rng.start)
        end = self._resolve(rng.end)
        if _order_key(start) > _order_key(end):
            raise InvalidRange(f"range starts after it ends: {start} > {end}")
        return start, end

    def _check_source(self, start: int, end: int) -> None:
        if not is_whitespace(self.source[start:end]):
            raise NonWhitespaceSource(start, end)

    # ── Editing ────────────────────────────────────────────────

    def add_change(self, rng: ResultRange, text: str) -> Change:
        """Replace ``rng`` of the edited result with whitespace ``text``.

        Edits touching an existing change are merged with it, so the returned
        change may cover more than ``rng``. Positions that refer to a merged
        change go stale; use the returned one.
        """
        if not is_whitespace(text):
            raise NonWhitespaceReplacement(text)
        start, end = self._resolve_range(rng)

        if isinstance(start, ChangePosition):
            if isinstance(end, ChangePosition):
                if start.change == end.change:
                    return self._revise(start, end, text)
                return self._bridge(start, end, text)
            if isinstance(end, SourcePosition):
                return self._extend_right(start, end, text)
        elif isinstance(start, SourcePosition):
            if isinstance(end, ChangePosition):
                return self._extend_left(start, end, text)
            if isinstance(end, SourcePosition):
                return self._insert(start, end, text)
        raise TypeError(f"unsupported range {rng!r}")

    def _insert(self, start: SourcePosition, end: SourcePosition, text: str) -> Change:
        following = self._higher(start.offset)
        if following is not None and following.start < end.offset:
            raise IntersectingChange(
                f"range [{start.offset}, {end.offset}) covers change "
                f"[{following.start}, {following.end})",
                start=start.offset,
                end=end.offset,
            )
        self._check_source(start.offset, end.offset)
        change = Change(TextRange(start.offset, end.offset), text)
        self._replace([], change)
        return change

    def _revise(self, start: ChangePosition, end: ChangePosition, text: str) -> Change:
        old = start.change
        replacement = old.replacement[: start.offset] + text + old.replacement[end.offset :]
        change = Change(old.range, replacement)
        self._replace([old], change)
        logger.debug("revised change at [%d, %d)", change.start, change.end)
        return change

    def _extend_right(self, start: ChangePosition, end: SourcePosition, text: str) -> Change:
        old = start.change
        following = self._higher(old.start)
        if not start.is_end or (following is not None and following.start <= end.offset):
            raise IntersectingChange(
                f"range from inside change [{old.start}, {old.end}) to {end.offset} "
                "intersects changes",
                start=old.start,
                end=end.offset,
            )
        self._check_source(old.end, end.offset)
        change = Change(TextRange(old.start, end.offset), old.replacement + text)
        self._replace([old], change)
        logger.debug("merged change to the right into [%d, %d)", change.start, change.end)
        return change

    def _extend_left(self, start: SourcePosition, end: ChangePosition, text: str) -> Change:
        old = end.change
        preceding = self._lower(old.start)
        if not end.is_start or (preceding is not None and preceding.end >= start.offset):
            raise IntersectingChange(
                f"range from {start.offset} into change [{old.start}, {old.end}) "
                "intersects changes",
                start=start.offset,
                end=old.end,
            )
        self._check_source(start.offset, old.start)
        change = Change(TextRange(start.offset, old.end), text + old.replacement)
        self._replace([old], change)
        logger.debug("merged change to the left into [%d, %d)", change.start, change.end)
        return change

    def _bridge(self, start: ChangePosition, end: ChangePosition, text: str) -> Change:
        earlier, later = start.change, end.change
        if self._higher(earlier.start) != later:
            raise IntersectingChange(
                f"range from change [{earlier.start}, {earlier.end}) to change "
                f"[{later.start}, {later.end}) spans other changes",
                start=earlier.start,
                end=later.end,
            )
        self._check_source(earlier.end, later.start)
        replacement = (
            earlier.replacement[: start.offset] + text + later.replacement[end.offset :]
        )
        change = Change(TextRange(earlier.start, later.end), replacement)
        self._replace([earlier, later], change)
        logger.debug("bridged two changes into [%d, %d)", change.start, change.end)
        return change

    # ── Traversal ──────────────────────────────────────────────

    def fragments(self, rng: ResultRange) -> Iterator[Fragment]:
        """Lazily yield the non-empty literal fragments covering ``rng``.

        The range is validated eagerly; the returned iterator must not
        outlive further calls to ``add_change``.

        A source offset on a change boundary stands for the start of that
        change, so an insertion at the very end of the source lies past
        ``ResultRange.between(0, len(source))``. Reach it with a
        ``ChangePosition`` at the end of its replacement.
        """
        start, end = self._resolve_range(rng)
        return self._walk(start, end)

    def _walk(self, start: Position, end: Position) -> Iterator[Fragment]:
        if isinstance(start, ChangePosition):
            change = start.change
            if isinstance(end, ChangePosition) and end.change == change:
                yield from _fragment(change.replacement[start.offset : end.offset], start)
                return
            yield from _fragment(change.replacement[start.offset :], start)
            current = change.end
        else:
            current = start.offset

        # `current` always sits at the beginning of a source stretch here.
        while True:
            following = self._higher(current)
            if isinstance(end, ChangePosition):
                # The end change lies ahead, so `following` cannot be None.
                assert following is not None
                yield from _fragment(
                    self.source[current : following.start], SourcePosition(current)
                )
                if following == end.change:
                    yield from _fragment(
                        following.replacement[: end.offset], ChangePosition(following, 0)
                    )
                    return
            else:
                if following is None or following.start > end.offset:
                    yield from _fragment(
                        self.source[current : end.offset], SourcePosition(current)
                    )
                    return
                yield from _fragment(
                    self.source[current : following.start], SourcePosition(current)
                )
            yield from _fragment(following.replacement, ChangePosition(following, 0))
            current = following.end

    def text(self, rng: ResultRange) -> str:
        """Edited text covered by ``rng``."""
        return "".join(fragment.text for fragment in self.fragments(rng))

    # ── Queries ────────────────────────────────────────────────

    def count_line_breaks(self, rng: ResultRange) -> int:
        """Count ``\\r\\n``, ``\\n`` and ``\\r`` sequences in ``rng``.

        Each fragment is counted on its own: a ``\\r`` ending one fragment
        followed by a ``\\n`` starting the next counts as two breaks.
        """
        return sum(
            len(_LINE_BREAK.findall(fragment.text)) for fragment in self.fragments(rng)
        )

    def count_simple_spaces(self, rng: ResultRange, tab_width: int) -> SpacesCount:
        """Count spaces, tabs, and the visual width they span.

        Columns start at zero at the beginning of ``rng`` and after every
        line break. Other characters add one column of width.
        """
        if tab_width <= 0:
            raise ValueError(f"tab width must be positive, got {tab_width}")
        spaces = tabs = visual = column = 0
        for fragment in self.fragments(rng):
            for ch in fragment.text:
                if ch == " ":
                    spaces += 1
                    visual += 1
                    column += 1
                elif ch == "\t":
                    tabs += 1
                    fill = tab_width - column % tab_width
                    visual += fill
                    column += fill
                elif ch in LINE_BREAK_CHARS:
                    column = 0
                else:
                    visual += 1
                    column += 1
        return SpacesCount(spaces, tabs, visual)

    def search(
        self, rng: ResultRange, direction: SearchDirection, kind: SearchKind
    ) -> SearchResult | None:
        """Find the first or last character of ``kind`` in ``rng``."""
        if direction is SearchDirection.FRONT_TO_BACK:
            for fragment in self.fragments(rng):
                for i, ch in enumerate(fragment.text):
                    found = _match(ch, kind)
                    if found is not None:
                        return SearchResult(fragment.origin.shifted(i), found)
            return None

        for fragment in reversed(list(self.fragments(rng))):
            for i in range(len(fragment.text) - 1, -1, -1):
                found = _match(fragment.text[i], kind)
                if found is not None:
                    return SearchResult(fragment.origin.shifted(i), found)
        return None

    # ── Materialization ────────────────────────────────────────

    def render(self) -> str:
        """The source with every change applied."""
        parts: list[str] = []
        current = 0
        for start in self._starts:
            change = self._changes[start]
            parts.append(self.source[current : change.start])
            parts.append(change.replacement)
            current = change.end
        parts.append(self.source[current:])
        return "".join(parts)


def _fragment(text: str, origin: Position) -> Iterator[Fragment]:
    if text:
        yield Fragment(text, origin)
