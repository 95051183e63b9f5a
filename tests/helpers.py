"""Shared test helpers for the wsfmt test suite."""

from __future__ import annotations

from wsfmt.edits import EditSet
from wsfmt.positions import Change, ChangePosition, ResultRange, SourcePosition


def src(offset: int) -> SourcePosition:
    return SourcePosition(offset)


def at(change: Change, offset: int) -> ChangePosition:
    return ChangePosition(change, offset)


def rng(start: int, end: int) -> ResultRange:
    """Range between two source offsets."""
    return ResultRange.between(start, end)


def whole(edits: EditSet) -> ResultRange:
    """Range covering the source, excluding any insertion at its very end."""
    return ResultRange.between(0, len(edits.source))
