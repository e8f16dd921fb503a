"""Events consumed by the controller and commands it hands back to the shell."""

from dataclasses import dataclass
from enum import Enum


class Action(Enum):
    """Key input abstracted from concrete bindings."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    SWITCH_PANE = "switch_pane"
    FOCUS_FILTER = "focus_filter"
    FOCUS_TASK = "focus_task"
    CONFIRM = "confirm"
    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"
    RESTORE = "restore"
    CYCLE_PRIORITY = "cycle_priority"
    TOGGLE_DUE_TODAY = "toggle_due_today"
    COPY = "copy"
    HELP = "help"
    QUIT = "quit"
    COMMIT = "commit"
    CANCEL = "cancel"
    SCROLL_TOP = "scroll_top"
    SCROLL_BOTTOM = "scroll_bottom"
    OTHER = "other"


@dataclass(frozen=True)
class KeyPressed:
    action: Action
    # Add/Edit buffer contents at the time of COMMIT
    text: str = ""


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class FileChanged:
    pass


@dataclass(frozen=True)
class StatusExpired:
    deadline: float


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class ScheduleStatusExpiry:
    deadline: float
    delay: float


@dataclass(frozen=True)
class CopyToClipboard:
    text: str


@dataclass(frozen=True)
class OpenEditor:
    """Add/Edit overlay opened; the shell pre-fills its input widget."""

    text: str


__all__ = [
    "Action",
    "KeyPressed",
    "Resized",
    "FileChanged",
    "StatusExpired",
    "Quit",
    "ScheduleStatusExpiry",
    "CopyToClipboard",
    "OpenEditor",
]
