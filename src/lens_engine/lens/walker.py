"""Expand the nearest match into one lens per visible line."""

from __future__ import annotations

from typing import Dict

from lens_engine.matches import MatchIndex

from .models import LensEntry, Resolution


class FoldAwareRangeWalker:
    """Walks outward from the nearest match collecting per-line lens entries.

    Relative indices count navigation steps from the cursor. The backward
    reference sits on the slot before the cursor's line, the forward one on
    the cursor's line itself, hence ``i - ref - 1`` versus ``i - ref``.
    """

    def walk(self, index: MatchIndex, resolution: Resolution) -> list[LensEntry]:
        by_line: Dict[int, LensEntry] = {}
        self._walk_backward(index, resolution, by_line)
        self._walk_forward(index, resolution, by_line)

        nearest_line = index.line_of(resolution.nearest_idx)
        fold = resolution.fold
        return [
            by_line[line]
            for line in sorted(by_line)
            if line != nearest_line
            and resolution.top_line <= line <= resolution.bottom_line
            and (fold is None or line not in fold)
        ]

    @staticmethod
    def _walk_backward(
        index: MatchIndex, resolution: Resolution, by_line: Dict[int, LensEntry]
    ) -> None:
        ref = resolution.nearest_idx - 1 - min(resolution.offset, 0)
        fold = resolution.fold
        if fold is not None:
            while ref >= 0 and index.line_of(ref) in fold:
                ref -= 1

        last_line = None
        for i in range(ref, -1, -1):
            line = index.line_of(i)
            if line < resolution.top_line:
                break
            # first hit on a line walking backward is its last match
            if line != last_line:
                last_line = line
                by_line[line] = LensEntry(i, i - ref - 1)

    @staticmethod
    def _walk_forward(
        index: MatchIndex, resolution: Resolution, by_line: Dict[int, LensEntry]
    ) -> None:
        total = len(index)
        ref = resolution.nearest_idx + 1 - max(resolution.offset, 0)
        fold = resolution.fold
        if fold is not None:
            while ref < total and index.line_of(ref) in fold:
                ref += 1

        last_line = index.line_of(resolution.nearest_idx)
        last_i = None
        line = last_line
        for i in range(ref, total):
            last_i = i
            line = index.line_of(i)
            if line != last_line:
                # credit the previous line to its last match
                last_line = line
                by_line[index.line_of(i - 1)] = LensEntry(i - 1, i - ref)
            if line > resolution.bottom_line:
                break

        if last_i is not None and line <= resolution.bottom_line:
            by_line[line] = LensEntry(last_i, last_i - ref + 1)


__all__ = ["FoldAwareRangeWalker"]
