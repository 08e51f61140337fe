"""Executable Textual app that shows search lenses over a text file."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to use lens_engine.adapters.textual.app"
    ) from exc

from lens_engine.lens.planner import LENS_STYLE, NEAR_STYLE
from lens_engine.render import MemoryRenderSink
from lens_engine.runtime.config import LensConfig
from lens_engine.runtime.engine import LensEngine

from .controller import LensView, TextualLensAdapter, TextualUIHooks
from .host import DocumentHost

STYLE_MAP = {
    NEAR_STYLE: "bold black on magenta",
    LENS_STYLE: "cyan",
    "Ignore": "",
}
MATCH_STYLE = "reverse"


def render_view(view: LensView) -> Text:
    """Paint a ``LensView`` as Rich text with a line-number gutter."""

    output = Text()
    for lnum, line in view.lines:
        row = Text(f"{lnum:>3} ", style="dim")
        body = Text(line)
        if view.highlight is not None:
            (sline, scol), (eline, ecol) = view.highlight
            if sline == lnum:
                end = ecol if eline == lnum else len(line)
                body.stylize(MATCH_STYLE, scol - 1, end)
        if lnum == view.cursor[0] and line:
            col = min(view.cursor[1], len(line)) - 1
            body.stylize("underline", col, col + 1)
        row.append_text(body)
        annotation = view.annotations.get(lnum)
        if annotation:
            nearest = view.highlight is not None and view.highlight[0][0] == lnum
            row.append(annotation, style=STYLE_MAP[NEAR_STYLE if nearest else LENS_STYLE])
        output.append_text(row)
        output.append("\n")
    return output


class LensDemoApp(App[None]):
    """Search a document with `/`, jump with n/N, watch the lenses follow."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#document-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#overlay-line, #status-line {
		height: 1;
		padding: 0 1;
	}

	#overlay-line {
		background: $surface-darken-1;
	}

	#search-input {
		display: none;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, host: DocumentHost, config: Optional[LensConfig] = None) -> None:
        super().__init__()
        self.host = host
        self.config = config or LensConfig.from_env()
        self.adapter: TextualLensAdapter | None = None
        self._search_forward = True

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="document-area"):
            yield Static("", id="document-view")
        yield Static("", id="overlay-line")
        yield Static("", id="status-line")
        yield Input(placeholder="pattern", id="search-input")
        yield Footer()

    def on_mount(self) -> None:
        sink = MemoryRenderSink()
        engine = LensEngine(self.host, self.host, sink, self.config)
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            log=self.log,
        )
        self.adapter = TextualLensAdapter(engine, self.host, sink, hooks)
        if self.host.search_highlight_active():
            engine.start(force=True)
        self.set_interval(0.05, self._tick)

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.engine.dispose()

    def _tick(self) -> None:
        if self.adapter:
            self.adapter.tick()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or self.query_one("#search-input", Input).has_focus:
            return
        if event.character in {"/", "?"}:
            self._search_forward = event.character == "/"
            search = self.query_one("#search-input", Input)
            search.display = True
            search.value = ""
            search.focus()
            event.stop()
            return
        key = event.character if event.character and event.character.isalpha() else event.key
        if self.adapter.handle_textual_key(key, text=event.character):
            event.stop()

    def on_input_submitted(self, message: Input.Submitted) -> None:
        search = self.query_one("#search-input", Input)
        search.display = False
        if self.adapter and message.value:
            self.adapter.search(message.value, forward=self._search_forward)

    def _update_view(self, view: LensView) -> None:
        self.query_one("#document-view", Static).update(render_view(view))
        overlay = self.query_one("#overlay-line", Static)
        if view.overlay is None:
            overlay.update("")
        else:
            (line, column), text = view.overlay
            overlay.update(Text(f"{line}:{column}{text}", style=STYLE_MAP[NEAR_STYLE]))

    def _update_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the search lens Textual demo.")
    parser.add_argument("path", nargs="?", help="Text file to open (default: demo text)")
    parser.add_argument("--pattern", help="Initial search pattern")
    parser.add_argument(
        "--float-when",
        choices=("auto", "always", "never"),
        default=os.environ.get("LENS_ENGINE_NEAREST_FLOAT_WHEN", "auto"),
    )
    parser.add_argument("--nearest-only", action="store_true")
    parser.add_argument("--calm-down", action="store_true")
    return parser.parse_args(argv)


DEMO_TEXT = """\
The quick brown fox jumps over the lazy dog.
A lens shows how many n presses reach each match.
fox fox fox
Nothing to see here.
Another fox appears at the end of a long line that may not leave room for its lens.
"""


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    text = Path(args.path).read_text(encoding="utf-8") if args.path else DEMO_TEXT
    host = DocumentHost.from_text(text.rstrip("\n"))
    overrides: dict[str, object] = {"nearest_float_when": args.float_when}
    if args.nearest_only:
        overrides["nearest_only"] = True
    if args.calm_down:
        overrides["calm_down"] = True
    config = LensConfig.from_env(**overrides)
    app = LensDemoApp(host, config)
    if args.pattern:
        host.set_search(args.pattern)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
