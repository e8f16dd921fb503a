"""Mode/focus state machine driving the two panes and the overlays."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from core import (
    FilterCatalogBuilder,
    FilterType,
    ParseError,
    Task,
    TaskCollection,
    is_active,
    is_due_today,
    is_overdue,
    parse_task,
)
from util.responsive import PaneLayout, help_max_scroll

from .events import (
    Action,
    CopyToClipboard,
    FileChanged,
    KeyPressed,
    OpenEditor,
    Quit,
    Resized,
    ScheduleStatusExpiry,
    StatusExpired,
)
from .ports import StorageError, TaskStorage
from .state import AppState, DueState, EditSession, Mode, Pane, StatusMessage, TaskRow
from .task_actions import cycle_priority, restore_deleted, soft_delete, toggle_completion, toggle_due_today

logger = logging.getLogger("todotui.controller")

SUCCESS_TTL = 2.0
ERROR_TTL = 5.0


@dataclass(frozen=True)
class Outcome:
    ok: bool = True
    message: str = ""


OK = Outcome()


def task_row(task: Task, now: datetime) -> TaskRow:
    parts = []
    if task.has_priority():
        parts.append(f"({task.priority})")
    parts.append(task.description)
    if task.has_due_date():
        parts.append(f"due:{task.due.isoformat()}")
    done = not is_active(task)
    due_state = DueState.NONE
    if not done and task.has_due_date():
        if is_overdue(task, now):
            due_state = DueState.OVERDUE
        elif is_due_today(task, now):
            due_state = DueState.TODAY
        else:
            due_state = DueState.FUTURE
    return TaskRow(text=" ".join(parts), done=done, due_state=due_state, priority=task.priority)


class ModeController:
    """Maps (event, mode, pane) to state changes and shell commands.

    `handle` runs one event to completion. Mutating transitions persist through
    the storage collaborator and only then rebuild the catalog and task list.
    """

    def __init__(
        self,
        state: AppState,
        storage: TaskStorage,
        builder: FilterCatalogBuilder,
        priority_levels: Sequence[str],
        layout: Optional[PaneLayout] = None,
        help_lines: int = 0,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.state = state
        self.storage = storage
        self.builder = builder
        self.priority_levels = list(priority_levels)
        self.layout = layout or PaneLayout()
        self.help_lines = help_lines
        self.clock = clock
        self._apply_size(state.width, state.height)

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #

    def handle(self, event) -> List[object]:
        if isinstance(event, KeyPressed):
            return self._handle_key(event)
        if isinstance(event, Resized):
            self.resize(event.width, event.height)
            return []
        if isinstance(event, StatusExpired):
            self.expire_status(event.deadline)
            return []
        if isinstance(event, FileChanged):
            # Reloading belongs to ChangeReconciler; the shell routes it there.
            logger.debug("file change reached the controller; ignored")
            return []
        logger.debug("unhandled event %r", event)
        return []

    def _handle_key(self, event: KeyPressed) -> List[object]:
        mode = self.state.mode
        if mode in (Mode.ADD, Mode.EDIT):
            return self._handle_editor_key(event)
        if mode is Mode.HELP:
            self._handle_help_key(event.action)
            return []
        return self._handle_normal_key(event.action)

    def _handle_normal_key(self, action: Action) -> List[object]:
        state = self.state
        if action is Action.QUIT:
            return [Quit()]
        if action is Action.HELP:
            self.open_help()
            return []
        if action is Action.ADD:
            return self.start_add()
        if action is Action.SWITCH_PANE:
            state.pane = Pane.TASK if state.pane is Pane.FILTER else Pane.FILTER
            return []
        if action is Action.FOCUS_FILTER:
            state.pane = Pane.FILTER
            return []
        if action is Action.FOCUS_TASK:
            state.pane = Pane.TASK
            return []
        if action in (Action.MOVE_UP, Action.MOVE_DOWN):
            self._move(action)
            return []
        if action is Action.CONFIRM and state.pane is Pane.FILTER:
            self.refresh_task_list()
            state.pane = Pane.TASK
            return []

        if state.pane is not Pane.TASK or state.selected_task_index() is None:
            return []

        if action is Action.EDIT:
            return self.start_edit()
        if action is Action.COPY:
            return [CopyToClipboard(self._selected_task().serialize())]
        if action is Action.CONFIRM:
            outcome = self.toggle_selected_completion()
        elif action is Action.DELETE:
            outcome = self.delete_selected()
        elif action is Action.RESTORE:
            outcome = self.restore_selected()
        elif action is Action.CYCLE_PRIORITY:
            outcome = self.cycle_selected_priority()
        elif action is Action.TOGGLE_DUE_TODAY:
            outcome = self.toggle_selected_due_today()
        else:
            return []
        return self._report(outcome)

    def _move(self, action: Action) -> None:
        state = self.state
        target = state.filter_list if state.pane is Pane.FILTER else state.task_list
        if action is Action.MOVE_UP:
            target.move_up()
        else:
            target.move_down()
        if state.pane is Pane.FILTER:
            self.refresh_task_list()

    # ------------------------------------------------------------------ #
    # Task pane mutations
    # ------------------------------------------------------------------ #

    def _selected_task(self) -> Task:
        return self.state.tasks[self.state.selected_task_index()]

    def _mutate_selected(self, change: Callable[[Task], Task], label: str) -> Outcome:
        index = self.state.selected_task_index()
        if index is None:
            return Outcome(False, "No task selected")
        before = self.state.tasks[index]
        after = change(before)
        if after == before:
            return OK
        self.state.tasks.replace(index, after)
        logger.debug("%s: %r -> %r", label, before.serialize(), after.serialize())
        return self.persist_and_refresh()

    def toggle_selected_completion(self) -> Outcome:
        now = self.clock()
        return self._mutate_selected(lambda task: toggle_completion(task, now), "toggle completion")

    def delete_selected(self) -> Outcome:
        if self.state.current_filter_is(FilterType.DELETED_TASKS):
            return OK
        now = self.clock()
        return self._mutate_selected(lambda task: soft_delete(task, now), "soft delete")

    def restore_selected(self) -> Outcome:
        state = self.state
        if state.current_filter_is(FilterType.DELETED_TASKS):
            return self._mutate_selected(restore_deleted, "restore deleted")
        if state.current_filter_is(FilterType.COMPLETED_TASKS):
            now = self.clock()
            return self._mutate_selected(
                lambda task: toggle_completion(task, now) if task.completed else task, "restore completed"
            )
        return OK

    def cycle_selected_priority(self) -> Outcome:
        return self._mutate_selected(lambda task: cycle_priority(task, self.priority_levels), "cycle priority")

    def toggle_selected_due_today(self) -> Outcome:
        now = self.clock()
        return self._mutate_selected(lambda task: toggle_due_today(task, now), "toggle due today")

    # ------------------------------------------------------------------ #
    # Add / Edit overlay
    # ------------------------------------------------------------------ #

    def start_add(self) -> List[object]:
        state = self.state
        state.edit = EditSession(mode=Mode.ADD, return_pane=state.pane)
        state.mode = Mode.ADD
        return [OpenEditor("")]

    def start_edit(self) -> List[object]:
        state = self.state
        index = state.selected_task_index()
        if index is None:
            return []
        line = state.tasks[index].serialize()
        state.edit = EditSession(mode=Mode.EDIT, original_line=line, return_pane=state.pane)
        state.mode = Mode.EDIT
        logger.debug("editing %r", line)
        return [OpenEditor(line)]

    def _handle_editor_key(self, event: KeyPressed) -> List[object]:
        if event.action is Action.CANCEL:
            self.close_editor()
            return []
        if event.action is Action.COMMIT:
            return self._report(self.commit(event.text))
        return []

    def close_editor(self) -> None:
        state = self.state
        session = state.edit
        state.mode = Mode.NORMAL
        state.edit = None
        if session is not None:
            state.pane = session.return_pane

    def commit(self, text: str) -> Outcome:
        """Apply the Add/Edit buffer.

        An empty buffer cancels. A buffer that does not parse keeps the overlay
        open so the text can be fixed.
        """
        state = self.state
        session = state.edit
        text = (text or "").strip()
        if session is None or not text:
            self.close_editor()
            return OK
        try:
            task = parse_task(text)
        except ParseError as exc:
            logger.info("rejected task text %r: %s", text, exc.reason)
            return Outcome(False, f"Failed to parse task: {exc.reason}")

        if session.mode is Mode.ADD:
            state.tasks.append(task)
            logger.debug("added %r", task.serialize())
        else:
            index = state.tasks.index_of_line(session.original_line)
            if index < 0:
                logger.warning("original task not found for edit: %r", session.original_line)
                self.close_editor()
                return Outcome(False, "Original task no longer exists")
            state.tasks.replace(index, task)
            logger.debug("replaced #%s %r -> %r", index, session.original_line, task.serialize())

        self.close_editor()
        outcome = self.persist_and_refresh()
        if outcome.ok:
            return Outcome(True, "Task saved")
        return outcome

    # ------------------------------------------------------------------ #
    # Help overlay
    # ------------------------------------------------------------------ #

    def open_help(self) -> None:
        state = self.state
        state.help_return_pane = state.pane
        state.help_scroll = 0
        state.mode = Mode.HELP

    def _handle_help_key(self, action: Action) -> None:
        state = self.state
        if action is Action.MOVE_DOWN:
            state.help_scroll = min(state.help_scroll + 1, state.help_max_scroll)
        elif action is Action.MOVE_UP:
            state.help_scroll = max(0, state.help_scroll - 1)
        elif action is Action.SCROLL_TOP:
            state.help_scroll = 0
        elif action is Action.SCROLL_BOTTOM:
            state.help_scroll = state.help_max_scroll
        else:
            state.mode = Mode.NORMAL
            state.help_scroll = 0
            state.pane = state.help_return_pane

    # ------------------------------------------------------------------ #
    # Status line
    # ------------------------------------------------------------------ #

    def set_status(self, text: str, ttl: float, error: bool = False) -> ScheduleStatusExpiry:
        deadline = self.clock().timestamp() + ttl
        self.state.status = StatusMessage(text=text, expires_at=deadline, error=error)
        return ScheduleStatusExpiry(deadline=deadline, delay=ttl)

    def expire_status(self, deadline: float) -> None:
        status = self.state.status
        if status.text and status.expires_at <= self.clock().timestamp():
            self.state.status = StatusMessage()

    def clipboard_result(self, ok: bool) -> List[object]:
        if ok:
            return [self.set_status("Task copied to clipboard", SUCCESS_TTL)]
        return [self.set_status("Failed to copy task", ERROR_TTL, error=True)]

    def _report(self, outcome: Outcome) -> List[object]:
        if not outcome.message:
            return []
        if outcome.ok:
            return [self.set_status(outcome.message, SUCCESS_TTL)]
        return [self.set_status(outcome.message, ERROR_TTL, error=True)]

    # ------------------------------------------------------------------ #
    # Persistence and derived views
    # ------------------------------------------------------------------ #

    def persist_and_refresh(self) -> Outcome:
        state = self.state
        try:
            self.storage.save(state.tasks, state.todo_path)
        except StorageError as exc:
            logger.error("failed to save %s: %s", state.todo_path, exc)
            return Outcome(False, f"Failed to save tasks: {exc}")
        self.refresh()
        return OK

    def replace_tasks(self, tasks: TaskCollection) -> None:
        self.state.tasks = tasks
        self.refresh()

    def refresh(self) -> None:
        self.refresh_filter_list()
        self.refresh_task_list()

    def refresh_filter_list(self) -> None:
        state = self.state
        previous = state.current_filter_label()
        catalog = self.builder.build(state.tasks, previous, self.clock())
        state.catalog = catalog
        state.filter_list.set_items_preserve_selection(catalog.display_items(), catalog.selected_index)

    def refresh_task_list(self) -> None:
        state = self.state
        now = self.clock()
        entry = state.current_filter()
        if entry is None:
            visible = TaskCollection()
        else:
            visible = entry.apply(state.tasks, self.builder.policy, now)
        state.visible_tasks = visible.sorted_by(lambda task: not is_active(task))
        state.task_list.set_items([task_row(task, now) for task in state.visible_tasks])

    def _apply_size(self, width: int, height: int) -> None:
        state = self.state
        state.width = width
        state.height = height
        rows = self.layout.list_height(height)
        state.filter_list.set_height(rows)
        state.task_list.set_height(rows)
        state.help_max_scroll = help_max_scroll(self.help_lines, height)
        state.help_scroll = min(state.help_scroll, state.help_max_scroll)

    def resize(self, width: int, height: int) -> None:
        self._apply_size(width, height)
        self.refresh()


__all__ = ["ModeController", "Outcome", "task_row"]
