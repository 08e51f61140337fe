import random

from lens_engine.lens import NearestResolver
from lens_engine.matches import CursorState, FoldRange, MatchIndex, VisibleRange

VIEW = VisibleRange(1, 50)


def make_index(*starts: tuple[int, int], width: int = 3) -> MatchIndex:
    return MatchIndex.from_pairs(
        ((line, col), (line, col + width - 1)) for line, col in starts
    )


def resolve(index: MatchIndex, line: int, col: int, *, forward: bool = True, **kwargs):
    return NearestResolver().resolve(
        index, CursorState(line, col, forward), VIEW, **kwargs
    )


def test_empty_list_reports_no_match() -> None:
    assert resolve(MatchIndex(), 1, 1) is None


def test_cursor_on_match_has_zero_offset() -> None:
    index = make_index((1, 1), (5, 3), (5, 10))

    resolution = resolve(index, 5, 4)

    assert resolution.nearest_idx == 1
    assert resolution.offset == 0
    assert resolution.cursor_in_range((5, 4))


def test_forward_search_picks_next_match() -> None:
    index = make_index((1, 5), (3, 1), (6, 1))

    resolution = resolve(index, 2, 1)

    assert resolution.nearest_idx == 1
    assert resolution.offset == 1
    assert not resolution.cursor_in_range((2, 1))


def test_forward_search_wraps_past_last_match() -> None:
    index = make_index((1, 1), (2, 1))

    resolution = resolve(index, 9, 1)

    assert resolution.nearest_idx == 0
    assert resolution.offset == 1


def test_backward_search_picks_previous_match() -> None:
    index = make_index((1, 5), (3, 1), (6, 1))

    resolution = resolve(index, 4, 1, forward=False)

    assert resolution.nearest_idx == 1
    assert resolution.offset == -1


def test_backward_search_wraps_before_first_match() -> None:
    index = make_index((3, 1), (4, 1))

    resolution = resolve(index, 1, 1, forward=False)

    assert resolution.nearest_idx == 1
    assert resolution.offset == -1


def test_scope_carries_viewport_and_fold() -> None:
    index = make_index((2, 1), (4, 1))
    fold = FoldRange(4, 6)

    resolution = NearestResolver().resolve(
        index, CursorState(4, 1), VisibleRange(2, 30), fold
    )

    assert resolution.top_line == 2
    assert resolution.bottom_line == 30
    assert resolution.folded_line == 4
    assert resolution.total == 2


def test_unordered_ends_fall_back_to_linear_scan() -> None:
    index = MatchIndex.from_pairs(
        [((1, 1), (4, 1)), ((2, 1), (2, 3)), ((5, 1), (5, 2))]
    )

    resolution = resolve(index, 3, 1)

    assert resolution.nearest_idx == 0
    assert resolution.offset == 0


def test_nearest_is_always_in_range() -> None:
    rng = random.Random(7)
    resolver = NearestResolver()
    for _ in range(200):
        lines = sorted(rng.sample(range(1, 40), rng.randint(1, 12)))
        index = make_index(*((line, rng.randint(1, 20)) for line in lines))
        cursor = CursorState(rng.randint(1, 45), rng.randint(1, 25), rng.random() < 0.5)

        resolution = resolver.resolve(index, cursor, VIEW)

        assert 0 <= resolution.nearest_idx < len(index)
        assert resolution.offset in (-1, 0, 1)
        if cursor.search_forward and cursor.position > index.end_of(len(index) - 1):
            assert resolution.nearest_idx == 0
        if not cursor.search_forward and cursor.position < index.start_of(0):
            assert resolution.nearest_idx == len(index) - 1
