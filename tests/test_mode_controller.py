from datetime import datetime, timedelta
from pathlib import Path

import pytest

from application.events import (
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
from application.mode_controller import ERROR_TTL, SUCCESS_TTL, ModeController, task_row
from application.ports import StorageError
from application.reconciler import load_tasks
from application.state import AppState, DueState, Mode, Pane
from core import (
    FILTER_ALL_TASKS,
    FILTER_COMPLETED_TASKS,
    FILTER_DELETED_TASKS,
    FILTER_HEADER_PROJECTS,
    CompletedTaskTransitionPolicy,
    FilterCatalogBuilder,
    TaskCollection,
    parse_task,
)

NOW = datetime(2024, 3, 6, 14, 30)
LEVELS = ["", "A", "B", "C", "D"]
HELP_LINE_COUNT = 34


class MemoryStorage:
    def __init__(self, lines):
        self.lines = list(lines)
        self.saved = []
        self.fail = False

    def load(self, path):
        return list(self.lines)

    def save(self, tasks, path):
        if self.fail:
            raise StorageError(path, "disk full")
        self.lines = tasks.lines()
        self.saved.append(self.lines)


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def make_controller(lines, policy=None, clock=None):
    storage = MemoryStorage(lines)
    state = AppState(todo_path=Path("todo.txt"))
    controller = ModeController(
        state,
        storage,
        FilterCatalogBuilder(policy or CompletedTaskTransitionPolicy()),
        LEVELS,
        help_lines=HELP_LINE_COUNT,
        clock=clock or (lambda: NOW),
    )
    controller.replace_tasks(load_tasks(storage, state.todo_path))
    return controller, storage


def press(controller, action, text=""):
    return controller.handle(KeyPressed(action, text))


def select_filter(controller, label):
    state = controller.state
    state.filter_list.select(state.catalog.index_of(label))
    controller.refresh_task_list()
    state.pane = Pane.TASK


def visible_lines(controller):
    return [task.serialize() for task in controller.state.visible_tasks]


def test_initial_state_selects_first_filter_in_filter_pane():
    controller, _ = make_controller(["buy milk", "call mom +family"])
    state = controller.state

    assert state.mode is Mode.NORMAL
    assert state.pane is Pane.FILTER
    assert state.current_filter_label() == FILTER_ALL_TASKS
    assert visible_lines(controller) == ["buy milk", "call mom +family"]
    assert state.active_count() == 2


def test_pane_switching_actions():
    controller, _ = make_controller(["a"])
    state = controller.state

    press(controller, Action.SWITCH_PANE)
    assert state.pane is Pane.TASK
    press(controller, Action.SWITCH_PANE)
    assert state.pane is Pane.FILTER
    press(controller, Action.FOCUS_TASK)
    assert state.pane is Pane.TASK
    press(controller, Action.FOCUS_FILTER)
    assert state.pane is Pane.FILTER


def test_moving_in_filter_pane_updates_task_list():
    controller, _ = make_controller(["a +p", "b"])

    press(controller, Action.MOVE_DOWN)
    assert controller.state.current_filter_label() == "No Project"
    assert visible_lines(controller) == ["b"]

    press(controller, Action.MOVE_DOWN)
    assert controller.state.catalog.entries[controller.state.filter_list.selected].is_header
    assert visible_lines(controller) == []


def test_confirm_in_filter_pane_focuses_tasks():
    controller, storage = make_controller(["a"])

    assert press(controller, Action.CONFIRM) == []
    assert controller.state.pane is Pane.TASK
    assert storage.saved == []


def test_task_actions_are_ignored_in_filter_pane():
    controller, storage = make_controller(["a"])

    for action in (Action.DELETE, Action.EDIT, Action.COPY, Action.CYCLE_PRIORITY, Action.TOGGLE_DUE_TODAY):
        assert press(controller, action) == []
    assert storage.saved == []
    assert controller.state.mode is Mode.NORMAL


def test_task_actions_need_a_selected_task():
    controller, storage = make_controller(["a +p"])
    select_filter(controller, FILTER_HEADER_PROJECTS)

    assert press(controller, Action.CONFIRM) == []
    assert press(controller, Action.EDIT) == []
    assert storage.saved == []


def test_confirm_in_task_pane_completes_and_persists():
    controller, storage = make_controller(["buy milk", "call mom +family"])
    press(controller, Action.FOCUS_TASK)

    assert press(controller, Action.CONFIRM) == []
    assert storage.saved == [["x 2024-03-06 buy milk", "call mom +family"]]
    # completed tasks leave All Tasks immediately with a zero delay
    assert visible_lines(controller) == ["call mom +family"]
    assert controller.state.catalog.entries[controller.state.catalog.index_of(FILTER_COMPLETED_TASKS)].count == 1


def test_completed_rows_sort_after_open_rows():
    policy = CompletedTaskTransitionPolicy(delay_days=1)
    controller, _ = make_controller(["x 2024-03-06 done", "open"], policy=policy)

    assert visible_lines(controller) == ["open", "x 2024-03-06 done"]
    rows = controller.state.task_list.items
    assert [row.done for row in rows] == [False, True]


def test_delete_marks_task_and_adds_deleted_filter():
    controller, storage = make_controller(["old plan", "keep"])
    press(controller, Action.FOCUS_TASK)
    press(controller, Action.DELETE)

    assert storage.lines == ["old plan deleted_at:2024-03-06", "keep"]
    assert FILTER_DELETED_TASKS in controller.state.catalog.labels()
    assert visible_lines(controller) == ["keep"]


def test_delete_in_deleted_filter_is_noop_and_restore_undeletes():
    controller, storage = make_controller(["old plan deleted_at:2024-03-01", "keep"])
    select_filter(controller, FILTER_DELETED_TASKS)

    assert press(controller, Action.DELETE) == []
    assert storage.saved == []

    press(controller, Action.RESTORE)
    assert storage.lines == ["old plan", "keep"]
    assert FILTER_DELETED_TASKS not in controller.state.catalog.labels()


def test_restore_in_completed_filter_reopens_task():
    controller, storage = make_controller(["x 2024-03-01 filed taxes"])
    select_filter(controller, FILTER_COMPLETED_TASKS)
    press(controller, Action.RESTORE)

    assert storage.lines == ["filed taxes"]


def test_restore_elsewhere_does_nothing():
    controller, storage = make_controller(["a"])
    press(controller, Action.FOCUS_TASK)

    assert press(controller, Action.RESTORE) == []
    assert storage.saved == []


def test_cycle_priority_and_due_today_persist():
    controller, storage = make_controller(["(D) thing"])
    press(controller, Action.FOCUS_TASK)

    press(controller, Action.CYCLE_PRIORITY)
    assert storage.lines == ["thing"]

    press(controller, Action.TOGGLE_DUE_TODAY)
    assert storage.lines == ["thing due:2024-03-06"]
    assert controller.state.current_filter_label() == FILTER_ALL_TASKS
    assert controller.state.catalog.labels()[:2] == ["Due Today", "This Week"]

    press(controller, Action.TOGGLE_DUE_TODAY)
    assert storage.lines == ["thing"]


def test_copy_emits_clipboard_command_and_reports_result():
    controller, _ = make_controller(["(A) call mom"])
    press(controller, Action.FOCUS_TASK)

    assert press(controller, Action.COPY) == [CopyToClipboard("(A) call mom")]

    commands = controller.clipboard_result(False)
    assert commands == [ScheduleStatusExpiry(deadline=NOW.timestamp() + ERROR_TTL, delay=ERROR_TTL)]
    assert controller.state.status.text == "Failed to copy task"
    assert controller.state.status.error

    controller.clipboard_result(True)
    assert controller.state.status.text == "Task copied to clipboard"
    assert not controller.state.status.error


def test_quit_returns_quit_command():
    controller, _ = make_controller(["a"])
    assert press(controller, Action.QUIT) == [Quit()]


def test_add_commit_appends_and_returns_to_previous_pane():
    controller, storage = make_controller(["a"])
    press(controller, Action.FOCUS_TASK)

    assert press(controller, Action.ADD) == [OpenEditor("")]
    assert controller.state.mode is Mode.ADD

    commands = press(controller, Action.COMMIT, "(B) new thing +proj")
    assert storage.lines == ["a", "(B) new thing +proj"]
    assert controller.state.mode is Mode.NORMAL
    assert controller.state.pane is Pane.TASK
    assert controller.state.status.text == "Task saved"
    assert commands == [ScheduleStatusExpiry(deadline=NOW.timestamp() + SUCCESS_TTL, delay=SUCCESS_TTL)]
    assert "  +proj" in controller.state.catalog.labels()


def test_edit_commit_replaces_original_line():
    controller, storage = make_controller(["buy milk", "other"])
    press(controller, Action.FOCUS_TASK)

    assert press(controller, Action.EDIT) == [OpenEditor("buy milk")]
    assert controller.state.mode is Mode.EDIT

    press(controller, Action.COMMIT, "buy oat milk")
    assert storage.lines == ["buy oat milk", "other"]
    assert controller.state.mode is Mode.NORMAL


def test_edit_of_vanished_task_reports_failure():
    controller, storage = make_controller(["buy milk"])
    press(controller, Action.FOCUS_TASK)
    press(controller, Action.EDIT)
    controller.replace_tasks(TaskCollection.from_lines(["something else"]))

    press(controller, Action.COMMIT, "buy oat milk")
    assert storage.saved == []
    assert controller.state.mode is Mode.NORMAL
    assert controller.state.status.text == "Original task no longer exists"
    assert controller.state.status.error


def test_unparseable_commit_keeps_editor_open():
    controller, storage = make_controller(["a"])
    press(controller, Action.ADD)

    commands = press(controller, Action.COMMIT, "(A) 2024-01-01")
    assert controller.state.mode is Mode.ADD
    assert controller.state.status.text.startswith("Failed to parse task")
    assert controller.state.status.error
    assert len(commands) == 1
    assert storage.saved == []


@pytest.mark.parametrize("text", ["", "   "])
def test_empty_commit_cancels(text):
    controller, storage = make_controller(["a"])
    press(controller, Action.ADD)

    assert press(controller, Action.COMMIT, text) == []
    assert controller.state.mode is Mode.NORMAL
    assert storage.saved == []


def test_cancel_closes_editor_without_saving():
    controller, storage = make_controller(["a"])
    press(controller, Action.FOCUS_TASK)
    press(controller, Action.EDIT)
    press(controller, Action.CANCEL)

    assert controller.state.mode is Mode.NORMAL
    assert controller.state.edit is None
    assert controller.state.pane is Pane.TASK
    assert storage.saved == []


def test_editor_ignores_navigation_keys():
    controller, _ = make_controller(["a"])
    press(controller, Action.ADD)

    assert press(controller, Action.QUIT) == []
    assert controller.state.mode is Mode.ADD


def test_save_failure_reports_error_and_skips_refresh():
    controller, storage = make_controller(["buy milk"])
    press(controller, Action.FOCUS_TASK)
    storage.fail = True

    commands = press(controller, Action.CONFIRM)
    assert len(commands) == 1
    assert controller.state.status.error
    assert controller.state.status.text.startswith("Failed to save tasks")
    assert controller.state.task_list.items[0].done is False


def test_help_scrolls_within_bounds_and_any_other_key_exits():
    controller, _ = make_controller(["a"])
    press(controller, Action.FOCUS_TASK)
    press(controller, Action.HELP)
    state = controller.state

    assert state.mode is Mode.HELP
    # 34 lines, 22 visible on a 24-row terminal
    assert state.help_max_scroll == 12

    press(controller, Action.MOVE_UP)
    assert state.help_scroll == 0
    for _ in range(3):
        press(controller, Action.MOVE_DOWN)
    assert state.help_scroll == 3
    press(controller, Action.SCROLL_BOTTOM)
    press(controller, Action.MOVE_DOWN)
    assert state.help_scroll == 12
    press(controller, Action.MOVE_UP)
    assert state.help_scroll == 11
    press(controller, Action.SCROLL_TOP)
    assert state.help_scroll == 0

    press(controller, Action.MOVE_DOWN)
    press(controller, Action.OTHER)
    assert state.mode is Mode.NORMAL
    assert state.help_scroll == 0
    assert state.pane is Pane.TASK


def test_status_expiry_only_clears_messages_past_their_deadline():
    clock = Clock(NOW)
    controller, _ = make_controller(["a"], clock=clock)

    first = controller.set_status("first", SUCCESS_TTL)
    clock.now = NOW + timedelta(seconds=1)
    second = controller.set_status("second", SUCCESS_TTL)

    clock.now = NOW + timedelta(seconds=2)
    controller.handle(StatusExpired(first.deadline))
    assert controller.state.status.text == "second"

    clock.now = NOW + timedelta(seconds=3)
    controller.handle(StatusExpired(second.deadline))
    assert controller.state.status.text == ""
    assert not controller.state.status.active(clock.now.timestamp())


def test_resize_updates_list_heights_and_help_bounds():
    controller, _ = make_controller(["a"])

    assert controller.handle(Resized(100, 40)) == []
    state = controller.state
    assert (state.width, state.height) == (100, 40)
    assert state.task_list.height == 34
    assert state.filter_list.height == 34
    assert state.help_max_scroll == 0

    controller.handle(Resized(100, 10))
    assert state.help_max_scroll == 26


def test_file_change_is_not_handled_by_controller():
    controller, storage = make_controller(["a"])
    storage.lines = ["b"]

    assert controller.handle(FileChanged()) == []
    assert visible_lines(controller) == ["a"]


def test_task_row_formats_priority_and_due_state():
    row = task_row(parse_task("(A) thing +p due:2024-03-05"), NOW)

    assert row.text == "(A) thing +p due:2024-03-05"
    assert row.due_state is DueState.OVERDUE
    assert row.priority == "A"
    assert not row.done

    assert task_row(parse_task("t due:2024-03-06"), NOW).due_state is DueState.TODAY
    assert task_row(parse_task("t due:2024-04-01"), NOW).due_state is DueState.FUTURE
    assert task_row(parse_task("x t due:2024-03-01"), NOW).due_state is DueState.NONE
    assert task_row(parse_task("t deleted_at:2024-03-01"), NOW).done
