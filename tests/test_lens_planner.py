import pytest

from lens_engine.lens import (
    LENS_STYLE,
    NEAR_STYLE,
    LensEntry,
    LensPlanner,
    WindowGeometry,
    default_lens_chunks,
    format_indicator,
)
from lens_engine.matches import MatchIndex


def make_index() -> MatchIndex:
    return MatchIndex.from_pairs(
        [((1, 1), (1, 4)), ((5, 3), (5, 6)), ((5, 10), (5, 13))]
    )


@pytest.mark.parametrize(
    ("relative_idx", "forward", "expected"),
    [
        (0, True, ""),
        (1, True, "n"),
        (-1, True, "N"),
        (1, False, "N"),
        (-1, False, "n"),
        (3, True, "3n"),
        (-4, True, "4N"),
        (-2, False, "2n"),
    ],
)
def test_indicator_letters(relative_idx: int, forward: bool, expected: str) -> None:
    assert format_indicator(relative_idx, forward) == expected


def test_nearest_label_without_indicator() -> None:
    chunks = default_lens_chunks(3, 0, 0, nearest=True, search_forward=True)

    assert chunks == ((" ", "Ignore"), ("[1/3]", NEAR_STYLE))


def test_nearest_label_with_indicator() -> None:
    chunks = default_lens_chunks(7, 1, 1, nearest=True, search_forward=True)

    assert chunks[1] == ("[n 2/7]", NEAR_STYLE)


def test_other_label_uses_base_style() -> None:
    chunks = default_lens_chunks(3, 2, 2, nearest=False, search_forward=True)

    assert chunks[1] == ("[2n 3]", LENS_STYLE)


def test_remaining_width_without_wrap() -> None:
    geometry = WindowGeometry(width=24, gutter_width=4)

    assert geometry.text_width == 20
    assert geometry.remaining_width(10) == 10
    assert geometry.remaining_width(30) == 0
    assert geometry.fits_inline(10, " [1/3]")
    assert not geometry.fits_inline(14, " [1/3]")


def test_remaining_width_with_wrap() -> None:
    geometry = WindowGeometry(width=24, gutter_width=4, wrap=True)

    assert geometry.remaining_width(25) == 15
    assert geometry.remaining_width(20) == 0
    assert geometry.remaining_width(0) == 0


def test_zero_width_window_never_fits() -> None:
    assert WindowGeometry(width=3, gutter_width=4, wrap=True).remaining_width(5) == 0


def plan(planner: LensPlanner, *, width: int = 80, end_column: int = 4):
    entries = [LensEntry(0, 0, is_nearest=True), LensEntry(2, 2)]
    return planner.plan(
        make_index(),
        entries,
        search_forward=True,
        geometry=WindowGeometry(width=width, gutter_width=4),
        line_end_column=lambda _line: end_column,
    )


def test_auto_placement_inline_when_label_fits() -> None:
    decisions = plan(LensPlanner())

    assert [d.mode for d in decisions] == ["inline", "inline"]
    assert decisions[0].text == " [1/3]"
    assert decisions[0].anchor == (1, 1)
    assert decisions[1].text == " [2n 3]"
    assert decisions[1].anchor == (5, 10)


def test_auto_placement_floats_when_label_does_not_fit() -> None:
    decisions = plan(LensPlanner(), width=10)

    assert decisions[0].mode == "floating"
    assert decisions[0].style_class == NEAR_STYLE
    assert decisions[1].mode == "inline"


def test_auto_placement_is_deterministic() -> None:
    planner = LensPlanner()

    modes = {plan(planner, width=14, end_column=4)[0].mode for _ in range(5)}

    # text width 10, 6 cells left, label is 6 cells long
    assert modes == {"floating"}


def test_always_and_never_policies() -> None:
    assert plan(LensPlanner(float_when="always"))[0].mode == "floating"
    assert plan(LensPlanner(float_when="never"), width=10)[0].mode == "inline"


def test_unknown_policy_is_rejected() -> None:
    with pytest.raises(ValueError):
        LensPlanner(float_when="sometimes")  # type: ignore[arg-type]


def test_override_formatter_replaces_labels() -> None:
    seen = []

    def formatter(matches, idx, relative_idx, nearest):
        seen.append((len(matches), idx, relative_idx, nearest))
        if idx == 2:
            return None
        return [(f"<{idx}>", "Custom")]

    planner = LensPlanner(formatter=formatter)
    decisions = planner.plan(
        make_index(),
        [LensEntry(0, 0, is_nearest=True), LensEntry(2, 2)],
        search_forward=True,
        nearest_offset=1,
    )

    assert seen == [(3, 0, 1, True), (3, 2, 2, False)]
    assert len(decisions) == 1
    assert decisions[0].text == "<0>"
    assert decisions[0].style_class == "Custom"
