"""Rendering helpers that turn AppState into prompt_toolkit fragments."""

from datetime import datetime
from typing import List, Tuple

from wcwidth import wcwidth

from application.state import AppState, DueState, Pane, TaskRow
from core import is_header_label

from .tui_help import context_help

StyleFragments = List[Tuple[str, str]]

ELLIPSIS = "..."
TIME_FORMAT = "%H:%M"
SEPARATOR = " │ "
CHECKBOX_OPEN = "○ "
CHECKBOX_DONE = "● "

_DUE_STYLES = {
    DueState.OVERDUE: "class:due.overdue",
    DueState.TODAY: "class:due.today",
    DueState.FUTURE: "class:due.future",
    DueState.NONE: "class:checkbox",
}


def display_width(text: str) -> int:
    """Return visual width of text accounting for wide/narrow characters."""
    width = 0
    for ch in text:
        w = wcwidth(ch)
        if w is None:
            w = 0
        width += max(0, w)
    return width


def trim_display(text: str, width: int) -> str:
    """Trim text so its visible width fits `width`, marking the cut with an ellipsis."""
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text
    budget = width - len(ELLIPSIS)
    if budget <= 0:
        return ELLIPSIS[:width]
    acc = []
    used = 0
    for ch in text:
        w = wcwidth(ch) or 0
        if w < 0:
            w = 0
        if used + w > budget:
            break
        acc.append(ch)
        used += w
    return "".join(acc) + ELLIPSIS


def pad_display(text: str, width: int) -> str:
    trimmed = trim_display(text, width)
    gap = width - display_width(trimmed)
    return trimmed + " " * gap if gap > 0 else trimmed


def _priority_style(priority: str) -> str:
    if priority in ("A", "B", "C", "D"):
        return f"class:priority.{priority.lower()}"
    return "class:priority.other"


def render_filter_pane(state: AppState, width: int) -> StyleFragments:
    fragments: StyleFragments = []
    lst = state.filter_list
    active = state.pane is Pane.FILTER
    for idx in lst.visible_range():
        label = lst.items[idx]
        if is_header_label(label):
            style = "class:header"
        else:
            style = "class:text"
        if idx == lst.selected:
            style = "class:selected" if active else f"{style} underline"
        fragments.append((style, pad_display(label, width)))
        fragments.append(("", "\n"))
    return fragments


def _task_fragments(row: TaskRow, width: int, selected: bool) -> StyleFragments:
    base = "class:done" if row.done else "class:text"
    if selected:
        base = f"{base} class:selected"
    checkbox = CHECKBOX_DONE if row.done else CHECKBOX_OPEN
    check_style = _DUE_STYLES[row.due_state]
    text = pad_display(row.text, max(0, width - display_width(checkbox)))
    fragments: StyleFragments = [(check_style, checkbox)]
    if row.priority and not row.done:
        marker = f"({row.priority})"
        if text.startswith(marker):
            fragments.append((_priority_style(row.priority), marker))
            text = text[len(marker):]
    fragments.append((base, text))
    return fragments


def render_task_pane(state: AppState, width: int) -> StyleFragments:
    lst = state.task_list
    if not lst.items:
        return [("class:text.dim", pad_display("No tasks", width))]
    fragments: StyleFragments = []
    active = state.pane is Pane.TASK
    for idx in lst.visible_range():
        fragments.extend(_task_fragments(lst.items[idx], width, active and idx == lst.selected))
        fragments.append(("", "\n"))
    return fragments


def current_filter_name(state: AppState) -> str:
    label = state.current_filter_label()
    if not label or is_header_label(label):
        return "All"
    return label.strip()


def status_info(state: AppState, now: datetime) -> str:
    return (
        f"{current_filter_name(state)}{SEPARATOR}"
        f"{len(state.visible_tasks)}/{state.active_count()}{SEPARATOR}"
        f"{now.strftime(TIME_FORMAT)}"
    )


def render_status_line(state: AppState, now: datetime, width: int) -> StyleFragments:
    """Context help on the left, status message or counters on the right."""
    status = state.status
    if status.active(now.timestamp()):
        right = status.text
        right_style = "class:status.fail" if status.error else "class:status.ok"
    else:
        right = status_info(state, now)
        right_style = "class:status"
    right = trim_display(right, max(0, width))
    room = width - display_width(right) - 2
    left = trim_display(context_help(state), room) if room > 10 else ""
    gap = max(1, width - display_width(left) - display_width(right))
    return [("class:text.dim", left), ("", " " * gap), (right_style, right)]


__all__ = [
    "display_width",
    "trim_display",
    "pad_display",
    "render_filter_pane",
    "render_task_pane",
    "current_filter_name",
    "status_info",
    "render_status_line",
]
