import pytest

from util.responsive import PaneLayout, help_max_scroll, help_visible_rows


@pytest.mark.parametrize("available", [20, 40, 46, 76, 120, 200])
def test_pane_widths_fill_available_width(available):
    left, right = PaneLayout().pane_widths(available)
    assert left + right == available
    assert left > 0 and right > 0


def test_pane_widths_follow_ratio_when_roomy():
    assert PaneLayout().pane_widths(76) == (25, 51)


def test_pane_widths_respect_minimums():
    assert PaneLayout().pane_widths(60) == (19, 41)
    assert PaneLayout(left_ratio=0.1).pane_widths(100) == (39, 61)


def test_pane_widths_shrink_proportionally_below_minimums():
    assert PaneLayout().pane_widths(40) == (15, 25)


def test_available_width_subtracts_borders():
    layout = PaneLayout()
    assert layout.available_width(80) == 76
    assert layout.available_width(22) == 18
    assert layout.available_width(0) == 76


@pytest.mark.parametrize(
    "height, expected",
    [(24, 18), (40, 34), (5, 1), (0, 18)],
)
def test_list_height(height, expected):
    assert PaneLayout().list_height(height) == expected


def test_help_max_scroll_is_first_line_of_last_page():
    assert help_visible_rows(24) == 22
    assert help_max_scroll(34, 24) == 12
    assert help_max_scroll(34, 100) == 0
    assert help_max_scroll(0, 10) == 0


def test_help_visible_rows_keeps_one_line_on_tiny_terminals():
    assert help_visible_rows(2) == 1
    assert help_visible_rows(0) == 1
    assert help_max_scroll(5, 1) == 4
