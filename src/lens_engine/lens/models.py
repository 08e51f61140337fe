"""Per-cycle lens records: entries to label and where to draw them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple

from lens_engine.matches import MaybeFold, MatchSpan, Position

Chunk = Tuple[str, str]  # (text, style class)
StyledChunks = Tuple[Chunk, ...]
PlacementMode = Literal["inline", "floating"]


@dataclass(frozen=True, slots=True)
class Resolution:
    """Nearest match and the scope the walker may expand into."""

    nearest_idx: int
    offset: int
    total: int
    span: MatchSpan
    top_line: int
    bottom_line: int
    fold: MaybeFold = None

    @property
    def folded_line(self) -> int | None:
        return self.fold.start if self.fold is not None else None

    @property
    def key(self) -> tuple[object, ...]:
        return (
            self.nearest_idx,
            self.offset,
            self.total,
            self.top_line,
            self.bottom_line,
            self.fold,
        )

    def cursor_in_range(self, position: Position) -> bool:
        return self.span.contains(position)


@dataclass(frozen=True, slots=True)
class LensEntry:
    """One match that gets its own lens.

    ``relative_idx`` is the signed number of navigation steps from the cursor;
    it is 0 for the nearest entry, whose direction hint comes from the
    resolver's offset instead.
    """

    match_idx: int
    relative_idx: int
    is_nearest: bool = False


@dataclass(frozen=True, slots=True)
class PlacementDecision:
    mode: PlacementMode
    anchor: Position
    text: str
    style_class: str
    chunks: StyledChunks
    match_idx: int
    is_nearest: bool = False

    @property
    def line(self) -> int:
        return self.anchor[0]


__all__ = [
    "Chunk",
    "LensEntry",
    "PlacementDecision",
    "PlacementMode",
    "Resolution",
    "StyledChunks",
]
