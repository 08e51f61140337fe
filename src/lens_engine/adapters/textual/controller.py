"""Adapter that routes Textual key events through the lens engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from lens_engine.matches import Position
from lens_engine.render import MemoryRenderSink
from lens_engine.runtime.engine import LensEngine
from lens_engine.runtime.events import LensEvent

from .host import DocumentHost


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class LensView:
    """Snapshot of what the window should show after an engine cycle."""

    lines: Tuple[Tuple[int, str], ...]
    cursor: Position
    annotations: Dict[int, str] = field(default_factory=dict)
    highlight: Optional[Tuple[Position, Position]] = None
    overlay: Optional[Tuple[Position, str]] = None
    started: bool = False

    def render_plain(self) -> list[str]:
        rendered = []
        for lnum, text in self.lines:
            rendered.append(text + self.annotations.get(lnum, ""))
        return rendered


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[LensView], None]
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualLensAdapter:
    """Vim-ish keys in, engine events out, ``LensView`` snapshots to the UI."""

    def __init__(
        self,
        engine: LensEngine,
        host: DocumentHost,
        sink: MemoryRenderSink,
        hooks: TextualUIHooks,
    ) -> None:
        self.engine = engine
        self.host = host
        self.sink = sink
        self.hooks = hooks
        self._refresh_view()

    def search(self, pattern: str, *, forward: bool = True) -> bool:
        found = self.host.set_search(pattern, forward=forward)
        self._log_state("search ->", pattern=pattern, forward=forward, found=found)
        if self.engine.is_started:
            self.engine.emit(LensEvent.REGION_CHANGED)
        else:
            self.engine.start(force=True)
        self.hooks.update_status(f"/{pattern}" if forward else f"?{pattern}")
        self._refresh_view()
        return found

    def handle_textual_key(self, key: str, *, text: Optional[str] = None) -> bool:
        self._log_state("key ->", key=key, text=text)
        host = self.host
        if key == "n":
            consumed = host.jump(host.search_forward)
        elif key == "N":
            consumed = host.jump(not host.search_forward)
        elif key in {"j", "down"}:
            host.move_by(lines=1)
            consumed = True
        elif key in {"k", "up"}:
            host.move_by(lines=-1)
            consumed = True
        elif key in {"h", "left"}:
            host.move_by(columns=-1)
            consumed = True
        elif key in {"l", "right"}:
            host.move_by(columns=1)
            consumed = True
        elif key == "x":
            if host.delete_char():
                self.engine.emit(LensEvent.TEXT_CHANGED)
            consumed = True
        elif key == "escape":
            host.clear_search_highlight()
            self.hooks.update_status("nohlsearch")
            consumed = True
        else:
            return False

        if key in {"n", "N"} and not self.engine.is_started:
            # jumping re-enables highlighting, as `n` does after :nohlsearch
            self.engine.start()
        self.engine.emit(LensEvent.CURSOR_MOVED)
        self._refresh_view()
        return consumed

    def enter_terminal(self) -> None:
        self.engine.emit(LensEvent.TERM_ENTER)
        self._refresh_view()

    def tick(self) -> bool:
        fired = self.engine.tick()
        if fired or not self.engine.is_started:
            self._refresh_view()
        return fired

    def snapshot(self) -> LensView:
        host, sink = self.host, self.sink
        annotations = sink.annotation_texts(host.buffer_id)
        highlight = None
        if sink.highlight is not None:
            _window, start, end = sink.highlight
            highlight = (start, end)
        overlay = sink.overlay
        return LensView(
            lines=tuple((lnum, host.lines[lnum - 1]) for lnum in host.visible_lines()),
            cursor=(host.cursor_line, host.cursor_column),
            annotations=annotations,
            highlight=highlight,
            overlay=(overlay.anchor, overlay.text) if overlay is not None else None,
            started=self.engine.is_started,
        )

    def _refresh_view(self) -> None:
        self.hooks.update_view(self.snapshot())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "cursor": (self.host.cursor_line, self.host.cursor_column),
            "started": self.engine.is_started,
            "scheduler": self.engine.scheduler.state.value,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


def create_adapter(
    host: DocumentHost,
    hooks: TextualUIHooks,
    *,
    engine_factory: Optional[Callable[[DocumentHost, MemoryRenderSink], LensEngine]] = None,
) -> TextualLensAdapter:
    """Wire a host, an in-memory sink, and an engine into an adapter."""

    sink = MemoryRenderSink()
    if engine_factory is None:
        engine = LensEngine(host, host, sink)
    else:
        engine = engine_factory(host, sink)
    return TextualLensAdapter(engine, host, sink, hooks)


__all__ = ["LensView", "TextualLensAdapter", "TextualUIHooks", "create_adapter"]
