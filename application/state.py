"""Owned application state threaded through the event loop."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from core import FilterCatalog, FilterDescriptor, FilterType, TaskCollection, is_active

from .scroll_list import ScrollableList


class Pane(Enum):
    FILTER = "filter"
    TASK = "task"


class Mode(Enum):
    NORMAL = "normal"
    ADD = "add"
    EDIT = "edit"
    HELP = "help"


class DueState(Enum):
    NONE = "none"
    OVERDUE = "overdue"
    TODAY = "today"
    FUTURE = "future"


@dataclass(frozen=True)
class TaskRow:
    """One rendered row of the task pane."""

    text: str
    done: bool
    due_state: DueState = DueState.NONE
    priority: str = ""


@dataclass
class StatusMessage:
    text: str = ""
    expires_at: float = 0.0
    error: bool = False

    def active(self, now: float) -> bool:
        return bool(self.text) and now < self.expires_at


@dataclass
class EditSession:
    mode: Mode
    original_line: str = ""
    return_pane: Pane = Pane.FILTER


@dataclass
class AppState:
    todo_path: Path
    tasks: TaskCollection = field(default_factory=TaskCollection)
    catalog: FilterCatalog = field(default_factory=lambda: FilterCatalog(entries=[]))
    visible_tasks: TaskCollection = field(default_factory=TaskCollection)
    filter_list: ScrollableList[str] = field(default_factory=ScrollableList)
    task_list: ScrollableList[TaskRow] = field(default_factory=ScrollableList)
    pane: Pane = Pane.FILTER
    mode: Mode = Mode.NORMAL
    edit: Optional[EditSession] = None
    help_scroll: int = 0
    help_max_scroll: int = 0
    help_return_pane: Pane = Pane.FILTER
    status: StatusMessage = field(default_factory=StatusMessage)
    width: int = 80
    height: int = 24

    def current_filter(self) -> Optional[FilterDescriptor]:
        return self.catalog.get(self.filter_list.selected)

    def current_filter_label(self) -> str:
        entry = self.current_filter()
        return entry.label if entry else ""

    def current_filter_is(self, filter_type: FilterType) -> bool:
        entry = self.current_filter()
        return entry is not None and entry.kind.type is filter_type

    def selected_task_index(self) -> Optional[int]:
        """Source-collection index of the task under the task-pane cursor."""
        if not len(self.visible_tasks):
            return None
        selected = self.task_list.selected
        if selected >= len(self.visible_tasks):
            return None
        return self.visible_tasks.origin(selected)

    def active_count(self) -> int:
        return sum(1 for task in self.tasks if is_active(task))


__all__ = ["Pane", "Mode", "DueState", "TaskRow", "StatusMessage", "EditSession", "AppState"]
