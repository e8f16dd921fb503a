from dataclasses import dataclass
from typing import Tuple

DEFAULT_TERMINAL_WIDTH = 80
DEFAULT_TERMINAL_HEIGHT = 24
PANE_BORDER_WIDTH = 4
HELP_STATUS_BAR_HEIGHT = 1
MIN_AVAILABLE_WIDTH = 20
MIN_CONTENT_HEIGHT = 3
MIN_LIST_HEIGHT = 1
# two border lines + one title line per pane
LIST_CONTENT_RESERVED = 3
# one row for the scroll indicator, one for the status bar
HELP_RESERVED_ROWS = 2


@dataclass
class PaneLayout:
    """Two-pane geometry derived from the terminal size."""
    left_ratio: float = 0.33
    min_left_width: int = 18
    min_right_width: int = 28
    vertical_padding: int = 2

    def pane_widths(self, available_width: int) -> Tuple[int, int]:
        """Split `available_width` into (filter pane, task pane) widths."""
        left = int(available_width * self.left_ratio)
        right = available_width - left
        total_min = self.min_left_width + self.min_right_width
        if total_min > available_width:
            left = int(available_width * self.min_left_width / total_min)
            return left, available_width - left
        left = max(left, self.min_left_width)
        right = max(right, self.min_right_width)
        if left + right > available_width:
            left = int(available_width * self.min_left_width / total_min)
            right = available_width - left
        return left, right

    def available_width(self, term_width: int) -> int:
        term_width = term_width if term_width > 0 else DEFAULT_TERMINAL_WIDTH
        available = term_width - PANE_BORDER_WIDTH
        if available < MIN_AVAILABLE_WIDTH:
            available = min(MIN_AVAILABLE_WIDTH, term_width - PANE_BORDER_WIDTH)
        return available

    def list_height(self, term_height: int) -> int:
        """Rows available to list content inside each pane."""
        term_height = term_height if term_height > 0 else DEFAULT_TERMINAL_HEIGHT
        padding = min(self.vertical_padding, term_height // 3)
        content = max(MIN_CONTENT_HEIGHT, term_height - HELP_STATUS_BAR_HEIGHT - padding)
        return max(MIN_LIST_HEIGHT, content - LIST_CONTENT_RESERVED)


def help_visible_rows(term_height: int) -> int:
    """Help lines shown at once on a terminal `term_height` rows tall."""
    return max(1, term_height - HELP_RESERVED_ROWS)


def help_max_scroll(line_count: int, term_height: int) -> int:
    """Upper bound of the help overlay scroll cursor: the first line of the last page."""
    return max(0, line_count - help_visible_rows(term_height))


__all__ = ["PaneLayout", "help_max_scroll", "help_visible_rows", "DEFAULT_TERMINAL_WIDTH", "DEFAULT_TERMINAL_HEIGHT"]
