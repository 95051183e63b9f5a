"""Whitespace-only edits over immutable text, and a formatter built on them."""

from wsfmt.edits import (
    EditSet,
    FoundKind,
    Fragment,
    SearchDirection,
    SearchKind,
    SearchResult,
    SpacesCount,
)
from wsfmt.errors import (
    EditError,
    IntersectingChange,
    InvalidRange,
    NonWhitespaceReplacement,
    NonWhitespaceSource,
    StaleChange,
)
from wsfmt.positions import (
    Change,
    ChangePosition,
    Position,
    ResultRange,
    SourcePosition,
    TextRange,
)

__version__ = "0.1.0"

__all__ = [
    "Change",
    "ChangePosition",
    "EditError",
    "EditSet",
    "FoundKind",
    "Fragment",
    "IntersectingChange",
    "InvalidRange",
    "NonWhitespaceReplacement",
    "NonWhitespaceSource",
    "Position",
    "ResultRange",
    "SearchDirection",
    "SearchKind",
    "SearchResult",
    "SourcePosition",
    "SpacesCount",
    "StaleChange",
    "TextRange",
]
