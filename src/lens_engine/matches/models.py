"""Positions, match spans, and editor-state snapshots consumed per cycle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

Position = Tuple[int, int]  # (line, column), both 1-indexed


@dataclass(frozen=True, slots=True)
class MatchSpan:
    """Start and end position of one search match."""

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"Match end {self.end} precedes start {self.start}")

    @property
    def line(self) -> int:
        return self.start[0]

    def contains(self, position: Position) -> bool:
        return self.start <= position <= self.end

    @classmethod
    def from_pair(cls, start: Sequence[int], end: Sequence[int]) -> "MatchSpan":
        return cls((int(start[0]), int(start[1])), (int(end[0]), int(end[1])))


MatchList = Sequence[MatchSpan]


@dataclass(frozen=True, slots=True)
class CursorState:
    """Cursor position plus the direction of the last search."""

    line: int
    column: int
    search_forward: bool = True

    @property
    def position(self) -> Position:
        return (self.line, self.column)


@dataclass(frozen=True, slots=True)
class VisibleRange:
    """First and last buffer line shown in the window."""

    top_line: int
    bottom_line: int

    def __post_init__(self) -> None:
        if self.bottom_line < self.top_line:
            raise ValueError("bottom_line cannot be above top_line")

    def __contains__(self, line: object) -> bool:
        return isinstance(line, int) and self.top_line <= line <= self.bottom_line


@dataclass(frozen=True, slots=True)
class FoldRange:
    """Closed fold covering ``start..end``; rendered as a single line."""

    start: int
    end: int

    def __contains__(self, line: object) -> bool:
        return isinstance(line, int) and self.start <= line <= self.end


# ``None`` stands for "cursor line is not inside a closed fold".
MaybeFold = Optional[FoldRange]

__all__ = [
    "CursorState",
    "FoldRange",
    "MatchList",
    "MatchSpan",
    "MaybeFold",
    "Position",
    "VisibleRange",
]
