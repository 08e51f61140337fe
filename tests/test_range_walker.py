import random
from typing import Optional

from lens_engine.lens import FoldAwareRangeWalker, LensEntry, NearestResolver
from lens_engine.matches import CursorState, FoldRange, MatchIndex, VisibleRange


def make_index(*starts: tuple[int, int]) -> MatchIndex:
    return MatchIndex.from_pairs(((line, col), (line, col + 2)) for line, col in starts)


def walk(
    index: MatchIndex,
    cursor: CursorState,
    *,
    top: int = 1,
    bottom: int = 50,
    fold: Optional[FoldRange] = None,
) -> list[LensEntry]:
    resolution = NearestResolver().resolve(index, cursor, VisibleRange(top, bottom), fold)
    assert resolution is not None
    return FoldAwareRangeWalker().walk(index, resolution)


def test_same_line_matches_credit_the_last_one_walking_forward() -> None:
    index = MatchIndex.from_pairs(
        [((1, 1), (1, 4)), ((5, 3), (5, 6)), ((5, 10), (5, 13))]
    )

    entries = walk(index, CursorState(1, 1))

    assert entries == [LensEntry(2, 2)]


def test_same_line_matches_credit_the_first_reached_walking_backward() -> None:
    index = make_index((2, 1), (2, 5), (4, 1))

    entries = walk(index, CursorState(4, 1))

    assert entries == [LensEntry(1, -1)]


def test_walk_stops_at_viewport_edges() -> None:
    index = make_index((1, 1), (3, 1), (5, 1), (7, 1), (9, 1))

    entries = walk(index, CursorState(5, 1), top=3, bottom=7)

    assert entries == [LensEntry(1, -1), LensEntry(3, 1)]


def test_matches_inside_cursor_fold_are_skipped() -> None:
    index = make_index((2, 1), (4, 1), (5, 1), (6, 1), (9, 1))

    entries = walk(index, CursorState(4, 1), fold=FoldRange(4, 6))

    assert entries == [LensEntry(0, -1), LensEntry(4, 1)]


def test_offset_shifts_both_directions() -> None:
    index = make_index((1, 5), (3, 1), (6, 1))

    entries = walk(index, CursorState(2, 1))

    # cursor sits between matches 0 and 1; `n` reaches match 1 in one step
    assert entries == [LensEntry(0, -1), LensEntry(2, 2)]


def test_backward_offset_counts_from_the_cursor() -> None:
    index = make_index((1, 1), (3, 1), (6, 1))

    entries = walk(index, CursorState(4, 1, search_forward=False))

    assert entries == [LensEntry(0, -2), LensEntry(2, 1)]


def test_forward_wrap_counts_every_match_as_ahead() -> None:
    index = make_index((1, 1), (3, 1), (5, 1))

    resolution = NearestResolver().resolve(index, CursorState(6, 1), VisibleRange(1, 50))
    assert resolution is not None
    assert (resolution.nearest_idx, resolution.offset) == (0, 1)

    entries = FoldAwareRangeWalker().walk(index, resolution)

    assert entries == [LensEntry(1, 2), LensEntry(2, 3)]


def test_entries_never_share_lines_or_leave_the_viewport() -> None:
    rng = random.Random(42)
    walker = FoldAwareRangeWalker()
    resolver = NearestResolver()
    for _ in range(300):
        starts = []
        for line in sorted(rng.sample(range(1, 30), rng.randint(1, 15))):
            for col in sorted(rng.sample(range(1, 30, 4), rng.randint(1, 3))):
                starts.append((line, col))
        index = make_index(*starts)
        cursor = CursorState(rng.randint(1, 30), rng.randint(1, 30), rng.random() < 0.5)
        top = rng.randint(1, 15)
        viewport = VisibleRange(top, top + rng.randint(0, 15))
        fold = None
        if rng.random() < 0.3:
            fold = FoldRange(cursor.line - rng.randint(0, 2), cursor.line + rng.randint(0, 3))

        resolution = resolver.resolve(index, cursor, viewport, fold)
        entries = walker.walk(index, resolution)

        lines = [index.line_of(entry.match_idx) for entry in entries]
        nearest_line = index.line_of(resolution.nearest_idx)
        assert len(lines) == len(set(lines))
        assert lines == sorted(lines)
        for line, entry in zip(lines, entries):
            assert viewport.top_line <= line <= viewport.bottom_line
            assert line != nearest_line
            assert fold is None or line not in fold
            assert entry.relative_idx != 0
            assert not entry.is_nearest
