"""Lens label formatting and inline-vs-floating placement."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol, Sequence

from lens_engine.matches import MatchIndex
from lens_engine.runtime.config import FLOAT_POLICIES, FloatPolicy

from .models import Chunk, LensEntry, PlacementDecision, StyledChunks

PAD_STYLE = "Ignore"
LENS_STYLE = "HlSearchLens"
NEAR_STYLE = "HlSearchLensNear"


class LensFormatter(Protocol):
    """Strategy that replaces the default label.

    Receives the cycle's match index, the match index being labelled, its
    relative index and whether it is the nearest match. Returning ``None``
    draws no lens for that match.
    """

    def __call__(
        self, matches: MatchIndex, idx: int, relative_idx: int, nearest: bool
    ) -> Optional[Sequence[Chunk]]: ...


def format_indicator(relative_idx: int, search_forward: bool) -> str:
    magnitude = abs(relative_idx)
    if magnitude == 0:
        return ""
    letter = "N" if search_forward != (relative_idx > 0) else "n"
    if magnitude == 1:
        return letter
    return f"{magnitude}{letter}"


def default_lens_chunks(
    total: int,
    idx: int,
    relative_idx: int,
    *,
    nearest: bool,
    search_forward: bool,
) -> StyledChunks:
    """Label a match; ``idx`` is 0-based and rendered 1-based."""

    indicator = format_indicator(relative_idx, search_forward)
    number = idx + 1
    if nearest:
        if indicator:
            text = f"[{indicator} {number}/{total}]"
        else:
            text = f"[{number}/{total}]"
        return ((" ", PAD_STYLE), (text, NEAR_STYLE))
    return ((" ", PAD_STYLE), (f"[{indicator} {number}]", LENS_STYLE))


def chunks_to_text(chunks: Iterable[Chunk]) -> str:
    return "".join(text for text, _style in chunks)


@dataclass(frozen=True, slots=True)
class WindowGeometry:
    """Window measurements needed to decide whether a label fits inline."""

    width: int
    gutter_width: int = 0
    wrap: bool = False

    @property
    def text_width(self) -> int:
        return max(self.width - self.gutter_width, 0)

    def remaining_width(self, end_column: int) -> int:
        """Cells left after a line whose rendered text ends at ``end_column``."""

        text_width = self.text_width
        if text_width <= 0:
            return 0
        if self.wrap:
            return text_width - (end_column - 1) % text_width - 1
        return max(0, text_width - end_column)

    def fits_inline(self, end_column: int, text: str) -> bool:
        return self.remaining_width(end_column) > len(text)


class LensPlanner:
    """Turns lens entries into placement decisions for the render sinks."""

    def __init__(
        self,
        *,
        float_when: FloatPolicy = "auto",
        formatter: Optional[LensFormatter] = None,
    ) -> None:
        if float_when not in FLOAT_POLICIES:
            raise ValueError(f"Unknown float policy '{float_when}'")
        self.float_when = float_when
        self.formatter = formatter

    def label(
        self,
        matches: MatchIndex,
        entry: LensEntry,
        *,
        search_forward: bool,
        nearest_offset: int = 0,
    ) -> Optional[StyledChunks]:
        relative_idx = nearest_offset if entry.is_nearest else entry.relative_idx
        if self.formatter is not None:
            chunks = self.formatter(matches, entry.match_idx, relative_idx, entry.is_nearest)
            return tuple(chunks) if chunks else None
        return default_lens_chunks(
            len(matches),
            entry.match_idx,
            relative_idx,
            nearest=entry.is_nearest,
            search_forward=search_forward,
        )

    def placement_mode(
        self,
        entry: LensEntry,
        text: str,
        geometry: Optional[WindowGeometry],
        end_column: int,
    ) -> str:
        if not entry.is_nearest or geometry is None or self.float_when == "never":
            return "inline"
        if self.float_when == "always":
            return "floating"
        return "inline" if geometry.fits_inline(end_column, text) else "floating"

    def plan(
        self,
        matches: MatchIndex,
        entries: Sequence[LensEntry],
        *,
        search_forward: bool,
        nearest_offset: int = 0,
        geometry: Optional[WindowGeometry] = None,
        line_end_column: Optional[Callable[[int], int]] = None,
    ) -> list[PlacementDecision]:
        decisions: list[PlacementDecision] = []
        for entry in entries:
            chunks = self.label(
                matches,
                entry,
                search_forward=search_forward,
                nearest_offset=nearest_offset,
            )
            if not chunks:
                continue
            anchor = matches.start_of(entry.match_idx)
            text = chunks_to_text(chunks)
            end_column = 0
            if entry.is_nearest and line_end_column is not None:
                end_column = line_end_column(anchor[0])
            mode = self.placement_mode(entry, text, geometry, end_column)
            decisions.append(
                PlacementDecision(
                    mode=mode,  # type: ignore[arg-type]
                    anchor=anchor,
                    text=text,
                    style_class=chunks[-1][1],
                    chunks=chunks,
                    match_idx=entry.match_idx,
                    is_nearest=entry.is_nearest,
                )
            )
        return decisions


__all__ = [
    "LENS_STYLE",
    "LensFormatter",
    "LensPlanner",
    "NEAR_STYLE",
    "PAD_STYLE",
    "WindowGeometry",
    "chunks_to_text",
    "default_lens_chunks",
    "format_indicator",
]
