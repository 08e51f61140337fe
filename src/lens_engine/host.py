"""Protocols describing the editor collaborators the engine talks to."""

from __future__ import annotations

from typing import Hashable, Optional, Protocol, Sequence

from lens_engine.lens.models import StyledChunks
from lens_engine.matches import CursorState, MatchSpan, MaybeFold, Position, VisibleRange

BufferId = Hashable
WindowId = Hashable
OverlayHandle = Hashable


class MatchSource(Protocol):
    """Supplies the active search pattern's matches for a buffer."""

    def find_matches(self, buffer: BufferId) -> Optional[Sequence[MatchSpan]]:
        """Return ordered match spans, or ``None`` when no pattern is active."""
        ...


class EditorView(Protocol):
    """Read-mostly view of cursor, viewport, and window geometry."""

    def current_buffer(self) -> BufferId: ...

    def current_window(self) -> Optional[WindowId]:
        """Window showing the current buffer, ``None`` if it is not displayed."""
        ...

    def cursor(self) -> CursorState: ...

    def viewport(self) -> VisibleRange: ...

    def fold_at(self, line: int) -> MaybeFold: ...

    def window_width(self, window: WindowId) -> int: ...

    def gutter_width(self, window: WindowId) -> int: ...

    def line_end_column(self, window: WindowId, line: int) -> int:
        """Rendered width of ``line``, i.e. the display column of its last cell."""
        ...

    def wraps(self, window: WindowId) -> bool: ...

    def search_highlight_active(self) -> bool: ...

    def clear_search_highlight(self) -> None:
        """Equivalent of ``:nohlsearch``."""
        ...


class RenderSink(Protocol):
    """Drawing surface for lenses, overlays, and the nearest-match highlight."""

    def set_inline_annotation(
        self, buffer: BufferId, line: int, column: int, chunks: StyledChunks
    ) -> None: ...

    def open_floating_overlay(
        self, window: WindowId, anchor: Position, chunks: StyledChunks, width: int
    ) -> OverlayHandle: ...

    def close_floating_overlay(self, handle: OverlayHandle) -> None: ...

    def set_nearest_highlight(
        self, window: WindowId, start: Position, end: Position
    ) -> None: ...

    def clear_all_highlights(self) -> None: ...

    def clear_buffer_annotations(self, buffer: BufferId) -> None: ...


__all__ = [
    "BufferId",
    "EditorView",
    "MatchSource",
    "OverlayHandle",
    "RenderSink",
    "WindowId",
]
