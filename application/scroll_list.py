"""Windowed cursor shared by the filter pane and the task pane."""

from typing import Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")


class ScrollableList(Generic[T]):
    """Selection + viewport offset over an ordered item sequence.

    Keeps `0 <= selected < len(items)` (or `selected == 0` when empty) and,
    when `height > 0`, `offset <= selected < offset + height`.
    """

    def __init__(self, height: int = 0, items: Optional[Sequence[T]] = None):
        self.items: List[T] = list(items or [])
        self.selected: int = 0
        self.offset: int = 0
        self.height: int = max(0, height)
        self._clamp_viewport()

    def __len__(self) -> int:
        return len(self.items)

    def _clamp_viewport(self) -> None:
        if self.height <= 0:
            return
        if self.selected < self.offset:
            self.offset = self.selected
        elif self.selected >= self.offset + self.height:
            self.offset = self.selected - self.height + 1

    def set_items(self, items: Sequence[T]) -> None:
        self.items = list(items)
        if self.selected >= len(self.items):
            self.selected = 0
        self._clamp_viewport()

    def set_items_preserve_selection(self, items: Sequence[T], desired_index: int) -> None:
        """Replace items and select `desired_index`, moving the viewport only if it must."""
        self.items = list(items)
        if 0 <= desired_index < len(self.items):
            self.selected = desired_index
        elif self.selected >= len(self.items):
            self.selected = 0
        self._clamp_viewport()

    def set_height(self, height: int) -> None:
        self.height = max(0, height)
        self._clamp_viewport()

    def select(self, index: int) -> None:
        if 0 <= index < len(self.items):
            self.selected = index
            self._clamp_viewport()

    def move_up(self) -> None:
        if self.selected > 0:
            self.selected -= 1
            self._clamp_viewport()

    def move_down(self) -> None:
        if self.selected < len(self.items) - 1:
            self.selected += 1
            self._clamp_viewport()

    def selected_item(self) -> Optional[T]:
        if 0 <= self.selected < len(self.items):
            return self.items[self.selected]
        return None

    def visible_range(self) -> range:
        if self.height <= 0:
            return range(0)
        return range(self.offset, min(len(self.items), self.offset + self.height))

    def visible_items(self) -> List[T]:
        return [self.items[idx] for idx in self.visible_range()]


__all__ = ["ScrollableList"]
