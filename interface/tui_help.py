"""Help overlay content and the one-line context help."""

from dataclasses import dataclass
from typing import List, Tuple

from application.state import AppState, Pane
from core import FilterType
from util.responsive import help_visible_rows

StyleFragments = List[Tuple[str, str]]

HELP_TITLE = "TodoTUI - Keyboard Shortcuts Help"
KEY_COLUMN_WIDTH = 18

FILTER_PANE_HELP = "?: help | j/k: navigate | Enter: select filter & move to tasks | Tab/h/l: switch panes | a: add | q: quit"
TASK_PANE_HELP = (
    "?: help | j/k: navigate | Enter: toggle completion | e: edit | p: priority toggle | "
    "t: toggle due today | d: delete | y: copy task | Tab/h/l: switch panes | a: add | q: quit"
)
DELETED_PANE_HELP = "?: help | j/k: navigate | r: restore task | y: copy task | Tab/h/l: switch panes | a: add | q: quit"
COMPLETED_PANE_HELP = (
    "?: help | j/k: navigate | Enter: toggle completion | r: restore task | e: edit | y: copy task | "
    "Tab/h/l: switch panes | a: add | q: quit"
)
EDITOR_HELP = "Enter/Ctrl+S: save | Esc/Ctrl+C: cancel"


@dataclass(frozen=True)
class HelpSection:
    category: str
    items: Tuple[Tuple[str, str], ...]


HELP_CONTENT: Tuple[HelpSection, ...] = (
    HelpSection(
        "Global Commands",
        (
            ("?", "Show/hide this help screen"),
            ("q / Ctrl+C", "Quit application"),
            ("a", "Add new task"),
            ("e", "Edit selected task"),
            ("d", "Delete selected task"),
            ("r", "Restore deleted/completed task"),
        ),
    ),
    HelpSection(
        "Navigation",
        (
            ("Tab", "Switch between panes"),
            ("h / ←", "Move to left pane (Workspaces)"),
            ("l / →", "Move to right pane (Todos)"),
            ("j / ↓", "Move down"),
            ("k / ↑", "Move up"),
            ("Enter", "Apply filter / Complete task"),
        ),
    ),
    HelpSection(
        "Help Navigation",
        (
            ("j / ↓", "Scroll down"),
            ("k / ↑", "Scroll up"),
            ("g", "Go to top"),
            ("G", "Go to bottom"),
            ("Any other key", "Close help"),
        ),
    ),
    HelpSection(
        "Task Operations",
        (
            ("y", "Copy task text to clipboard"),
            ("p", "Cycle task priority"),
            ("t", "Toggle due date to today"),
        ),
    ),
    HelpSection(
        "Edit Mode",
        (
            ("Esc / Ctrl+C", "Cancel editing"),
            ("Enter / Ctrl+S", "Save task"),
        ),
    ),
)


def context_help(state: AppState) -> str:
    if state.pane is Pane.FILTER:
        return FILTER_PANE_HELP
    if state.current_filter_is(FilterType.DELETED_TASKS):
        return DELETED_PANE_HELP
    if state.current_filter_is(FilterType.COMPLETED_TASKS):
        return COMPLETED_PANE_HELP
    return TASK_PANE_HELP


def help_lines() -> List[StyleFragments]:
    """Every line of the help overlay as styled fragments."""
    lines: List[StyleFragments] = [[("class:title", HELP_TITLE)], []]
    for idx, section in enumerate(HELP_CONTENT):
        if idx:
            lines.append([])
        lines.append([("class:help.category", f"▶ {section.category}")])
        for key, description in section.items:
            lines.append(
                [
                    ("", "  "),
                    ("class:help.key", key.ljust(KEY_COLUMN_WIDTH)),
                    ("class:border", " │ "),
                    ("class:text", description),
                ]
            )
    lines.append([])
    return lines


def render_help(scroll: int, height: int) -> StyleFragments:
    """Visible window of the help overlay starting at line `scroll`."""
    lines = help_lines()
    visible = help_visible_rows(height)
    start = max(0, min(scroll, max(0, len(lines) - visible)))
    end = min(len(lines), start + visible)
    fragments: StyleFragments = []
    for line in lines[start:end]:
        fragments.extend(line)
        fragments.append(("", "\n"))
    if len(lines) > visible:
        up = "↑" if start > 0 else " "
        down = "↓" if end < len(lines) else " "
        fragments.append(("class:text.dim", f"{up} {start + 1}-{end}/{len(lines)} {down}"))
    return fragments


__all__ = [
    "HELP_CONTENT",
    "HelpSection",
    "EDITOR_HELP",
    "context_help",
    "help_lines",
    "render_help",
]
