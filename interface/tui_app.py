"""prompt_toolkit shell around ModeController: layout, keys, queue draining."""

import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.layout import ConditionalContainer, HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.widgets import Frame, TextArea

from application.event_queue import EventQueue
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
from application.mode_controller import ModeController
from application.ports import StorageError, TaskStorage
from application.reconciler import ChangeReconciler, load_tasks
from application.state import AppState, Mode, Pane
from config import AppConfig, expand_home, load_config
from core import CompletedTaskTransitionPolicy, FilterCatalogBuilder, ParseError
from infrastructure.file_watcher import FileWatcher, WatcherError
from infrastructure.todo_repository import TodoFileRepository
from util.logging_setup import setup_logging
from util.responsive import PaneLayout

from .tui_clipboard import build_clipboard, copy_text
from .tui_help import EDITOR_HELP, help_lines, render_help
from .tui_keys import build_key_bindings
from .tui_render import render_filter_pane, render_status_line, render_task_pane
from .tui_themes import build_style

logger = logging.getLogger("todotui.app")

FILTER_PANE_TITLE = "Workspaces"
TASK_PANE_TITLE = "Todos"
ADD_TASK_TITLE = "Add New Task"
EDIT_TASK_TITLE = "Edit Task"


def transition_policy(config: AppConfig) -> CompletedTaskTransitionPolicy:
    transition = config.ui.completed_task_transition
    return CompletedTaskTransitionPolicy(delay_days=transition.delay_days, transition_hour=transition.transition_hour)


def pane_layout(config: AppConfig) -> PaneLayout:
    ui = config.ui
    return PaneLayout(
        left_ratio=ui.left_pane_ratio,
        min_left_width=ui.min_left_pane_width,
        min_right_width=ui.min_right_pane_width,
        vertical_padding=ui.vertical_padding,
    )


class TodoTUI:
    """Full-screen two-pane todo.txt browser.

    Every input (keys, resizes, watcher signals, status timers) goes through
    one EventQueue and is handled to completion on the prompt_toolkit loop.
    """

    def __init__(
        self,
        todo_path: Path,
        config: AppConfig,
        storage: Optional[TaskStorage] = None,
        clock: Callable[[], datetime] = datetime.now,
        watch: bool = True,
    ):
        self.config = config
        self.clock = clock
        self.storage = storage or TodoFileRepository()
        self.geometry = pane_layout(config)
        self.state = AppState(todo_path=Path(todo_path))
        self.controller = ModeController(
            self.state,
            self.storage,
            FilterCatalogBuilder(transition_policy(config)),
            config.priority_levels,
            layout=self.geometry,
            help_lines=len(help_lines()),
            clock=clock,
        )
        self.reconciler = ChangeReconciler(self.storage, self.controller)
        self.controller.replace_tasks(load_tasks(self.storage, self.state.todo_path))
        logger.info("loaded %s tasks from %s", len(self.state.tasks), self.state.todo_path)

        self.queue = EventQueue()
        self.watcher: Optional[FileWatcher] = FileWatcher(self.state.todo_path, self.queue.put) if watch else None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

        self.clipboard = build_clipboard()
        self.editor = TextArea(multiline=False, wrap_lines=False, focusable=True, prompt="> ")
        self.editor.buffer.on_text_changed += lambda _: self.force_render()

        kb = build_key_bindings(lambda: self.state.mode, self._on_action, self._on_commit)
        self.filter_window = Window(
            content=FormattedTextControl(self._filter_text, focusable=True, show_cursor=False),
            width=lambda: Dimension.exact(self._pane_widths()[0]),
            height=lambda: Dimension.exact(self.state.filter_list.height),
            always_hide_cursor=True,
            wrap_lines=False,
        )
        self.task_window = Window(
            content=FormattedTextControl(self._task_text, focusable=True, show_cursor=False),
            width=lambda: Dimension.exact(self._pane_widths()[1]),
            height=lambda: Dimension.exact(self.state.task_list.height),
            always_hide_cursor=True,
            wrap_lines=False,
        )
        self.help_window = Window(content=FormattedTextControl(self._help_text), always_hide_cursor=True, wrap_lines=False)
        self.status_bar = Window(content=FormattedTextControl(self._status_text), height=1, always_hide_cursor=True)

        def in_mode(*modes: Mode) -> Condition:
            return Condition(lambda: self.state.mode in modes)

        panes = VSplit(
            [
                Frame(self.filter_window, title=lambda: self._pane_title(FILTER_PANE_TITLE, Pane.FILTER)),
                Frame(self.task_window, title=lambda: self._pane_title(TASK_PANE_TITLE, Pane.TASK)),
            ]
        )
        editor_frame = Frame(
            HSplit([self.editor, Window(FormattedTextControl([("class:text.dim", EDITOR_HELP)]), height=1)]),
            title=self._editor_title,
        )
        root = HSplit(
            [
                ConditionalContainer(panes, filter=in_mode(Mode.NORMAL)),
                ConditionalContainer(self.help_window, filter=in_mode(Mode.HELP)),
                ConditionalContainer(editor_frame, filter=in_mode(Mode.ADD, Mode.EDIT)),
                Window(),
                self.status_bar,
            ]
        )
        self.app = Application(
            layout=Layout(root, focused_element=self.filter_window),
            key_bindings=kb,
            style=build_style(config.theme),
            full_screen=True,
            refresh_interval=1.0,
            clipboard=self.clipboard,
        )
        self.app.ttimeoutlen = 0.05
        self.app.before_render += self._check_size

    # ------------------------------------------------------------------ #
    # Rendering callbacks
    # ------------------------------------------------------------------ #

    def _pane_widths(self) -> Tuple[int, int]:
        return self.geometry.pane_widths(self.geometry.available_width(self.state.width))

    def _pane_title(self, title: str, pane: Pane) -> FormattedText:
        style = "class:title" if self.state.pane is pane else "class:title.inactive"
        return FormattedText([(style, f" {title} ")])

    def _editor_title(self) -> str:
        return EDIT_TASK_TITLE if self.state.mode is Mode.EDIT else ADD_TASK_TITLE

    def _filter_text(self) -> FormattedText:
        return FormattedText(render_filter_pane(self.state, self._pane_widths()[0]))

    def _task_text(self) -> FormattedText:
        return FormattedText(render_task_pane(self.state, self._pane_widths()[1]))

    def _help_text(self) -> FormattedText:
        return FormattedText(render_help(self.state.help_scroll, self.state.height))

    def _status_text(self) -> FormattedText:
        return FormattedText(render_status_line(self.state, self.clock(), self.state.width))

    def force_render(self) -> None:
        app = getattr(self, "app", None)
        if app:
            app.invalidate()

    def _check_size(self, _app) -> None:
        size = self.app.output.get_size()
        if (size.columns, size.rows) != (self.state.width, self.state.height):
            # Already on the loop thread mid-render: handle in place, no invalidate.
            self.queue.put(Resized(size.columns, size.rows))
            self._drain(render=False)

    # ------------------------------------------------------------------ #
    # Event flow
    # ------------------------------------------------------------------ #

    def _on_action(self, action: Action) -> None:
        self.queue.put(KeyPressed(action))
        self._drain()

    def _on_commit(self) -> None:
        self.queue.put(KeyPressed(Action.COMMIT, self.editor.text))
        self._drain()

    def dispatch(self, event: object) -> List[object]:
        if isinstance(event, FileChanged):
            outcome = self.reconciler.on_file_changed()
            if not outcome.ok:
                logger.debug("reload skipped: %s", outcome.message)
            return []
        return self.controller.handle(event)

    def _drain(self, render: bool = True) -> None:
        for event in self.queue.drain():
            self._execute(self.dispatch(event))
        self._sync_focus()
        if render:
            self.force_render()

    def _execute(self, commands: Iterable[object]) -> None:
        for command in commands:
            if isinstance(command, Quit):
                if self.app.is_running:
                    self.app.exit()
            elif isinstance(command, ScheduleStatusExpiry):
                self._schedule_expiry(command)
            elif isinstance(command, CopyToClipboard):
                self._execute(self.controller.clipboard_result(copy_text(self.clipboard, command.text)))
            elif isinstance(command, OpenEditor):
                self.editor.text = command.text
                self.editor.buffer.cursor_position = len(command.text)
            else:
                logger.debug("unknown command %r", command)

    def _schedule_expiry(self, command: ScheduleStatusExpiry) -> None:
        loop = self._loop
        if loop is None:
            return
        loop.call_later(command.delay, self.queue.put, StatusExpired(command.deadline))

    def _sync_focus(self) -> None:
        if self.state.mode in (Mode.ADD, Mode.EDIT):
            target = self.editor
        elif self.state.pane is Pane.TASK:
            target = self.task_window
        else:
            target = self.filter_window
        layout = self.app.layout
        if not layout.has_focus(target):
            layout.focus(target)

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def _on_start(self) -> None:
        loop = asyncio.get_running_loop()
        self._loop = loop
        self.queue.set_wakeup(lambda: loop.call_soon_threadsafe(self._drain))
        if self.watcher is not None:
            self.watcher.start()

    def run(self) -> None:
        try:
            self.app.run(pre_run=self._on_start)
        finally:
            if self.watcher is not None:
                self.watcher.stop()
            self.queue.set_wakeup(None)


def cmd_tui(args) -> int:
    config = load_config(Path(args.config) if getattr(args, "config", None) else None)
    if getattr(args, "theme", None):
        config.theme = args.theme
    log_path = setup_logging(config.logging.log_level, debug=bool(getattr(args, "debug", False)))
    logger.info("todotui started (log: %s)", log_path)

    todo_file = getattr(args, "todo_file", None) or config.default_todo_file
    if not todo_file:
        logger.error("no todo file specified")
        print("Error: No todo file specified. Use CLI argument or set default_todo_file in config.", file=sys.stderr)
        print("Example: todotui ~/todo.txt", file=sys.stderr)
        return 1

    path = Path(expand_home(todo_file))
    try:
        tui = TodoTUI(path, config)
    except (StorageError, ParseError, WatcherError) as exc:
        logger.error("failed to initialize: %s", exc)
        print(f"Error initializing: {exc}", file=sys.stderr)
        return 1
    tui.run()
    logger.info("todotui exited")
    return 0


__all__ = ["TodoTUI", "cmd_tui", "transition_policy", "pane_layout"]
