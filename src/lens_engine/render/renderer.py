"""Applies placement decisions to a render sink."""

from __future__ import annotations

from typing import Hashable, Optional, Sequence

from lens_engine.host import RenderSink
from lens_engine.lens.models import PlacementDecision, StyledChunks
from lens_engine.matches import MatchSpan, Position
from lens_engine.runtime import telemetry

from .state import LensRenderState, OverlayState


class LensRenderer:
    """Full clear-and-redraw of one buffer's lenses plus overlay upkeep."""

    def __init__(
        self,
        sink: RenderSink,
        state: Optional[LensRenderState] = None,
        *,
        logger_name: str | None = None,
    ) -> None:
        self.sink = sink
        self.state = state or LensRenderState()
        self._logger_name = logger_name or "lens_engine.render"

    def highlight(self, window: Hashable, span: MatchSpan) -> None:
        self.sink.set_nearest_highlight(window, span.start, span.end)

    def draw(
        self,
        buffer: Hashable,
        window: Hashable,
        decisions: Sequence[PlacementDecision],
    ) -> None:
        self.sink.clear_buffer_annotations(buffer)
        floated = False
        for decision in decisions:
            if decision.mode == "floating":
                self.show_overlay(window, decision.anchor, decision.chunks, decision.text)
                floated = True
            else:
                line, column = decision.anchor
                self.sink.set_inline_annotation(buffer, line, column, decision.chunks)
        if not floated:
            self.close_overlay()
        self.state.record(buffer, tuple(decisions))

    def show_overlay(
        self, window: Hashable, anchor: Position, chunks: StyledChunks, text: str
    ) -> OverlayState:
        current = self.state.overlay
        if (
            current is not None
            and current.window == window
            and current.anchor == anchor
            and current.chunks == chunks
        ):
            return current
        self.close_overlay()
        handle = self.sink.open_floating_overlay(window, anchor, chunks, len(text))
        self.state.overlay = OverlayState(
            handle=handle, window=window, anchor=anchor, text=text, chunks=chunks
        )
        telemetry.record_event(
            "overlay.open",
            level="debug",
            data={"window": window, "anchor": anchor, "width": len(text)},
            logger_name=self._logger_name,
        )
        return self.state.overlay

    def close_overlay(self) -> bool:
        overlay = self.state.overlay
        if overlay is None:
            return False
        self.state.overlay = None
        self.sink.close_floating_overlay(overlay.handle)
        telemetry.record_event(
            "overlay.close",
            level="debug",
            data={"window": overlay.window},
            logger_name=self._logger_name,
        )
        return True

    def clear(
        self,
        *,
        highlight: bool = False,
        buffer: Hashable | None = None,
        overlay: bool = False,
    ) -> None:
        if highlight:
            self.sink.clear_all_highlights()
        if buffer is not None:
            self.sink.clear_buffer_annotations(buffer)
            self.state.forget(buffer)
        if overlay:
            self.close_overlay()

    def clear_all(self) -> None:
        self.close_overlay()
        for buffer in self.state.buffers:
            self.sink.clear_buffer_annotations(buffer)
        self.sink.clear_all_highlights()
        self.state.reset()


__all__ = ["LensRenderer"]
