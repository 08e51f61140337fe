"""Match spans, cursor/viewport snapshots, and the ordered match index."""

from .index import MatchIndex
from .models import (
    CursorState,
    FoldRange,
    MatchList,
    MatchSpan,
    MaybeFold,
    Position,
    VisibleRange,
)
from .validation import (
    MatchIndexError,
    MatchListError,
    MatchOrderError,
    ensure_document_order,
    ensure_index,
)

__all__ = [
    "CursorState",
    "FoldRange",
    "MatchIndex",
    "MatchIndexError",
    "MatchList",
    "MatchListError",
    "MatchOrderError",
    "MatchSpan",
    "MaybeFold",
    "Position",
    "VisibleRange",
    "ensure_document_order",
    "ensure_index",
]
