"""Locate the match nearest the cursor in cyclic navigation order."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Optional

from lens_engine.matches import CursorState, MatchIndex, MaybeFold, Position, VisibleRange

from .models import Resolution


class NearestResolver:
    """Finds the nearest match and the visible scope around it.

    Forward searches pick the first match whose span reaches the cursor and
    wrap to the first match past the end of the buffer. Backward searches
    mirror that: the last match starting at or before the cursor, wrapping to
    the last match. ``offset`` is 0 when the cursor sits inside that span and
    otherwise the single step (+1 forward, -1 backward) needed to reach it.
    """

    def resolve(
        self,
        index: MatchIndex,
        cursor: CursorState,
        viewport: VisibleRange,
        fold: MaybeFold = None,
    ) -> Optional[Resolution]:
        total = len(index)
        if total == 0:
            return None

        position = cursor.position
        if cursor.search_forward:
            nearest, offset = self._forward(index, position)
        else:
            nearest, offset = self._backward(index, position)

        return Resolution(
            nearest_idx=nearest,
            offset=offset,
            total=total,
            span=index.span(nearest),
            top_line=viewport.top_line,
            bottom_line=viewport.bottom_line,
            fold=fold,
        )

    @staticmethod
    def _forward(index: MatchIndex, position: Position) -> tuple[int, int]:
        total = len(index)
        if index.ends_ordered:
            i = bisect_left(index.ends(), position)
        else:
            ends = index.ends()
            i = next((k for k in range(total) if ends[k] >= position), total)
        if i == total:
            return 0, 1
        return i, 0 if index.span(i).contains(position) else 1

    @staticmethod
    def _backward(index: MatchIndex, position: Position) -> tuple[int, int]:
        i = bisect_right(index.starts(), position) - 1
        if i < 0:
            return len(index) - 1, -1
        return i, 0 if index.span(i).contains(position) else -1


__all__ = ["NearestResolver"]
