"""Lens engine: one explicit instance per editing session."""

from __future__ import annotations

from typing import Callable, List, Optional

from lens_engine.host import EditorView, MatchSource, RenderSink
from lens_engine.lens import (
    FoldAwareRangeWalker,
    LensEntry,
    LensPlanner,
    NearestResolver,
    WindowGeometry,
)
from lens_engine.matches import MatchIndex
from lens_engine.render import CycleSnapshot, LensRenderer, LensRenderState
from lens_engine.runtime import telemetry

from .config import LensConfig
from .events import Disposable, EventBus, LensEvent, dispose_all
from .lifecycle import LifecycleController
from .scheduler import RefreshScheduler


class LensEngine:
    """Composes scheduler, lifecycle, and the resolve/walk/plan/draw pipeline."""

    def __init__(
        self,
        source: MatchSource,
        view: EditorView,
        sink: RenderSink,
        config: Optional[LensConfig] = None,
        *,
        bus: Optional[EventBus] = None,
        clock: Optional[Callable[[], float]] = None,
        logger_name: str | None = None,
    ) -> None:
        self.source = source
        self.view = view
        self.config = config or LensConfig()
        self.bus = bus or EventBus()
        self._logger_name = logger_name or "lens_engine.engine"

        self.resolver = NearestResolver()
        self.walker = FoldAwareRangeWalker()
        self.planner = LensPlanner(
            float_when=self.config.nearest_float_when,
            formatter=self.config.override_lens,
        )
        self.renderer = LensRenderer(sink, LensRenderState())
        self.scheduler = RefreshScheduler(
            self._refresh_current_buffer,
            is_active=view.search_highlight_active,
            on_inactive=self.stop,
            interval_ms=self.config.refresh_interval_ms,
            clock=clock,
        )
        self.lifecycle = LifecycleController(
            self.bus,
            self.scheduler,
            is_search_active=view.search_highlight_active,
            calm_down=self.config.calm_down,
            on_term_enter=self._clear_current_buffer,
            on_text_changed=lambda: self.scheduler.defer(self._noh_and_stop),
            on_teardown=self.renderer.clear_all,
        )
        self._disposables: List[Disposable] = [Disposable(self.scheduler.cancel)]

    @property
    def is_started(self) -> bool:
        return self.lifecycle.is_started

    @property
    def render_state(self) -> LensRenderState:
        return self.renderer.state

    def start(self, force: bool = False) -> bool:
        return self.lifecycle.start(force)

    def stop(self) -> None:
        self.lifecycle.stop()

    def refresh(self, force: bool = False) -> bool:
        if not self.is_started:
            return False
        return self.scheduler.request(force)

    def tick(self) -> bool:
        return self.scheduler.tick()

    def emit(self, event: str | LensEvent, payload: object | None = None) -> int:
        return self.bus.emit(event, payload)

    def dispose(self) -> None:
        self.stop()
        dispose_all(self._disposables)

    def _noh_and_stop(self) -> None:
        if not self.is_started:
            return
        self.view.clear_search_highlight()
        self.stop()

    def _clear_current_buffer(self) -> None:
        self.renderer.clear(
            highlight=True, buffer=self.view.current_buffer(), overlay=True
        )

    def _refresh_current_buffer(self, force: bool) -> None:
        view = self.view
        buffer = view.current_buffer()
        with telemetry.span(
            "lens::refresh",
            logger_name=self._logger_name,
            component="lens_engine.engine",
            metadata={"buffer": buffer, "force": force},
        ) as handle:
            spans = self.source.find_matches(buffer)
            if spans is None:
                handle.skip("no_pattern")
                self.stop()
                return

            index = MatchIndex(spans)
            handle.add_metadata("matches", len(index))
            cursor = view.cursor()
            resolution = self.resolver.resolve(
                index, cursor, view.viewport(), view.fold_at(cursor.line)
            )
            if resolution is None:
                handle.skip("empty")
                self._clear_current_buffer()
                telemetry.record_event(
                    "lens.cleared",
                    data={"buffer": buffer, "reason": "no_matches"},
                    logger_name=self._logger_name,
                )
                return

            if self.config.calm_down and not resolution.cursor_in_range(cursor.position):
                handle.skip("cursor_left_match")
                self._noh_and_stop()
                return

            window = view.current_window()
            if window is None:
                handle.skip("no_window")
                self._clear_current_buffer()
                return

            geometry = WindowGeometry(
                width=view.window_width(window),
                gutter_width=view.gutter_width(window),
                wrap=view.wraps(window),
            )
            # a resize can flip the nearest lens between inline and floating
            key = resolution.key + (
                window,
                geometry,
                view.line_end_column(window, resolution.span.line),
            )
            if (
                not force
                and not self.config.calm_down
                and self.render_state.is_repeat(buffer, key, index)
            ):
                handle.skip("unchanged")
                return

            self.renderer.highlight(window, resolution.span)
            entries = [LensEntry(resolution.nearest_idx, 0, is_nearest=True)]
            if not self.config.nearest_only:
                entries.extend(self.walker.walk(index, resolution))

            decisions = self.planner.plan(
                index,
                entries,
                search_forward=cursor.search_forward,
                nearest_offset=resolution.offset,
                geometry=geometry,
                line_end_column=lambda line: view.line_end_column(window, line),
            )
            self.renderer.draw(buffer, window, decisions)
            self.render_state.last_cycle = CycleSnapshot(buffer, key, index)
            handle.note(
                "drawn", nearest=resolution.nearest_idx, lenses=len(decisions)
            )


__all__ = ["LensEngine"]
