"""In-memory render sink used by the demo host and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
from typing import Dict, Hashable, Iterator, List, Optional, Tuple

from lens_engine.lens.models import StyledChunks
from lens_engine.lens.planner import chunks_to_text
from lens_engine.matches import Position


@dataclass(frozen=True, slots=True)
class InlineAnnotation:
    line: int
    column: int
    chunks: StyledChunks

    @property
    def text(self) -> str:
        return chunks_to_text(self.chunks)


@dataclass(frozen=True, slots=True)
class FloatingOverlay:
    handle: int
    window: Hashable
    anchor: Position
    chunks: StyledChunks
    width: int

    @property
    def text(self) -> str:
        return chunks_to_text(self.chunks)


@dataclass(slots=True)
class MemoryRenderSink:
    """Keeps whatever the engine draws so it can be inspected or painted later."""

    annotations: Dict[Hashable, Dict[int, InlineAnnotation]] = field(default_factory=dict)
    overlays: Dict[int, FloatingOverlay] = field(default_factory=dict)
    highlight: Optional[Tuple[Hashable, Position, Position]] = None
    calls: List[str] = field(default_factory=list)
    _handles: Iterator[int] = field(default_factory=lambda: count(1), repr=False)

    def set_inline_annotation(
        self, buffer: Hashable, line: int, column: int, chunks: StyledChunks
    ) -> None:
        self.calls.append("set_inline_annotation")
        # one end-of-line annotation per line, like a single extmark per lens
        self.annotations.setdefault(buffer, {})[line] = InlineAnnotation(
            line, column, tuple(chunks)
        )

    def open_floating_overlay(
        self, window: Hashable, anchor: Position, chunks: StyledChunks, width: int
    ) -> int:
        self.calls.append("open_floating_overlay")
        handle = next(self._handles)
        self.overlays[handle] = FloatingOverlay(handle, window, anchor, tuple(chunks), width)
        return handle

    def close_floating_overlay(self, handle: Hashable) -> None:
        self.calls.append("close_floating_overlay")
        if not isinstance(handle, int) or handle not in self.overlays:
            raise KeyError(f"Unknown overlay handle {handle!r}")
        del self.overlays[handle]

    def set_nearest_highlight(self, window: Hashable, start: Position, end: Position) -> None:
        self.calls.append("set_nearest_highlight")
        self.highlight = (window, start, end)

    def clear_all_highlights(self) -> None:
        self.calls.append("clear_all_highlights")
        self.highlight = None

    def clear_buffer_annotations(self, buffer: Hashable) -> None:
        self.calls.append("clear_buffer_annotations")
        self.annotations.pop(buffer, None)

    def annotation_texts(self, buffer: Hashable) -> Dict[int, str]:
        return {
            line: annotation.text
            for line, annotation in sorted(self.annotations.get(buffer, {}).items())
        }

    @property
    def overlay(self) -> Optional[FloatingOverlay]:
        if not self.overlays:
            return None
        return self.overlays[max(self.overlays)]

    @property
    def is_clear(self) -> bool:
        return not self.annotations and not self.overlays and self.highlight is None


__all__ = ["FloatingOverlay", "InlineAnnotation", "MemoryRenderSink"]
