"""In-memory document standing in for an editor buffer and window."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from rich.cells import cell_len

from lens_engine.matches import CursorState, FoldRange, MatchSpan, MaybeFold, VisibleRange


@dataclass
class DocumentHost:
    """Single buffer in a single window, searchable with a Python regex.

    Implements both ``MatchSource`` and ``EditorView``. Lines and columns are
    1-indexed to match the engine's positions.
    """

    lines: List[str] = field(default_factory=lambda: [""])
    buffer_id: str = "document"
    window_id: Optional[str] = "main"
    cursor_line: int = 1
    cursor_column: int = 1
    search_forward: bool = True
    top_line: int = 1
    height: int = 20
    width: int = 80
    gutter: int = 4
    wrap: bool = False
    pattern: Optional[str] = None
    hlsearch: bool = False
    folds: List[FoldRange] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str, **kwargs: object) -> "DocumentHost":
        return cls(lines=text.split("\n") or [""], **kwargs)  # type: ignore[arg-type]

    @property
    def line_count(self) -> int:
        return len(self.lines)

    # MatchSource

    def find_matches(self, buffer: object) -> Optional[List[MatchSpan]]:
        if buffer != self.buffer_id or not self.pattern:
            return None
        regex = re.compile(self.pattern)
        spans: List[MatchSpan] = []
        for lnum, text in enumerate(self.lines, start=1):
            for match in regex.finditer(text):
                if match.end() == match.start():
                    continue
                spans.append(
                    MatchSpan((lnum, match.start() + 1), (lnum, match.end()))
                )
        return spans

    # EditorView

    def current_buffer(self) -> str:
        return self.buffer_id

    def current_window(self) -> Optional[str]:
        return self.window_id

    def cursor(self) -> CursorState:
        return CursorState(self.cursor_line, self.cursor_column, self.search_forward)

    def viewport(self) -> VisibleRange:
        return VisibleRange(self.top_line, self._bottom_line())

    def fold_at(self, line: int) -> MaybeFold:
        containing = [fold for fold in self.folds if line in fold]
        if not containing:
            return None
        return min(containing, key=lambda fold: fold.end - fold.start)

    def window_width(self, window: object) -> int:
        return self.width

    def gutter_width(self, window: object) -> int:
        return self.gutter

    def line_end_column(self, window: object, line: int) -> int:
        return cell_len(self.lines[line - 1])

    def wraps(self, window: object) -> bool:
        return self.wrap

    def search_highlight_active(self) -> bool:
        return self.hlsearch and bool(self.pattern)

    def clear_search_highlight(self) -> None:
        self.hlsearch = False

    # editing and navigation used by the adapter

    def set_search(self, pattern: str, *, forward: bool = True) -> bool:
        re.compile(pattern)
        self.pattern = pattern
        self.search_forward = forward
        self.hlsearch = True
        return self.jump(forward, include_cursor=True)

    def jump(self, forward: bool, *, include_cursor: bool = False) -> bool:
        spans = self.find_matches(self.buffer_id) or []
        if not spans:
            return False
        here = (self.cursor_line, self.cursor_column)
        if forward:
            ahead = [s for s in spans if s.start > here or (include_cursor and s.start == here)]
            target = ahead[0] if ahead else spans[0]
        else:
            behind = [s for s in spans if s.start < here or (include_cursor and s.start == here)]
            target = behind[-1] if behind else spans[-1]
        self.move_cursor(*target.start)
        self.hlsearch = True
        return True

    def move_cursor(self, line: int, column: int) -> None:
        self.cursor_line = min(max(line, 1), self.line_count)
        text = self.lines[self.cursor_line - 1]
        self.cursor_column = min(max(column, 1), max(len(text), 1))
        self._scroll_to_cursor()

    def move_by(self, lines: int = 0, columns: int = 0) -> None:
        self.move_cursor(self.cursor_line + lines, self.cursor_column + columns)

    def insert_text(self, text: str) -> None:
        row = self.cursor_line - 1
        current = self.lines[row]
        col = self.cursor_column - 1
        self.lines[row] = current[:col] + text + current[col:]
        self.cursor_column += len(text)

    def delete_char(self) -> bool:
        row = self.cursor_line - 1
        current = self.lines[row]
        col = self.cursor_column - 1
        if col >= len(current):
            return False
        self.lines[row] = current[:col] + current[col + 1 :]
        self.move_cursor(self.cursor_line, self.cursor_column)
        return True

    def toggle_fold(self, start: int, end: int) -> bool:
        fold = FoldRange(start, end)
        if fold in self.folds:
            self.folds.remove(fold)
            return False
        self.folds.append(fold)
        return True

    def visible_lines(self) -> List[int]:
        """Buffer lines drawn in the window; a closed fold shows its first line."""

        shown: List[int] = []
        line = self.top_line
        while line <= self.line_count and len(shown) < self.height:
            shown.append(line)
            fold = self.fold_at(line)
            line = (fold.end if fold is not None else line) + 1
        return shown

    def _bottom_line(self) -> int:
        shown = self.visible_lines()
        if not shown:
            return self.top_line
        fold = self.fold_at(shown[-1])
        return min(fold.end if fold is not None else shown[-1], self.line_count)

    def _scroll_to_cursor(self) -> None:
        if self.cursor_line < self.top_line:
            self.top_line = self.cursor_line
            return
        while self.cursor_line > self._bottom_line():
            self.top_line += 1


__all__ = ["DocumentHost"]
