"""Concrete key bindings mapped onto abstract controller actions."""

from typing import Callable, Dict, Tuple

from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys

from application.events import Action
from application.state import Mode

NORMAL_KEYS: Dict[Action, Tuple[str, ...]] = {
    Action.QUIT: ("q", "c-c"),
    Action.HELP: ("?",),
    Action.ADD: ("a",),
    Action.EDIT: ("e",),
    Action.SWITCH_PANE: ("tab",),
    Action.FOCUS_FILTER: ("h", "left"),
    Action.FOCUS_TASK: ("l", "right"),
    Action.CONFIRM: ("enter",),
    Action.DELETE: ("d",),
    Action.RESTORE: ("r",),
    Action.CYCLE_PRIORITY: ("p",),
    Action.TOGGLE_DUE_TODAY: ("t",),
    Action.COPY: ("y",),
    Action.MOVE_DOWN: ("j", "down"),
    Action.MOVE_UP: ("k", "up"),
}

HELP_KEYS: Dict[Action, Tuple[str, ...]] = {
    Action.MOVE_DOWN: ("j", "down"),
    Action.MOVE_UP: ("k", "up"),
    Action.SCROLL_TOP: ("g",),
    Action.SCROLL_BOTTOM: ("G",),
}

EDITOR_KEYS: Dict[Action, Tuple[str, ...]] = {
    Action.COMMIT: ("enter", "c-s"),
    Action.CANCEL: ("escape", "c-c"),
}


def build_key_bindings(
    get_mode: Callable[[], Mode],
    on_action: Callable[[Action], None],
    on_commit: Callable[[], None],
) -> KeyBindings:
    """Register every binding; `on_commit` reads the editor buffer itself."""
    kb = KeyBindings()
    kb.timeout = 0

    normal = Condition(lambda: get_mode() is Mode.NORMAL)
    help_open = Condition(lambda: get_mode() is Mode.HELP)
    editing = Condition(lambda: get_mode() in (Mode.ADD, Mode.EDIT))

    # Later registrations win over Keys.Any, so the catch-all goes first.
    @kb.add(Keys.Any, filter=help_open)
    def _(event):
        on_action(Action.OTHER)

    def bind(keys: Tuple[str, ...], action: Action, condition, eager: bool = False) -> None:
        for key in keys:
            kb.add(key, filter=condition, eager=eager)(lambda event, action=action: on_action(action))

    for action, keys in NORMAL_KEYS.items():
        bind(keys, action, normal)
    for action, keys in HELP_KEYS.items():
        bind(keys, action, help_open)

    for key in EDITOR_KEYS[Action.COMMIT]:
        kb.add(key, filter=editing)(lambda event: on_commit())
    bind(EDITOR_KEYS[Action.CANCEL], Action.CANCEL, editing, eager=True)
    return kb


__all__ = ["NORMAL_KEYS", "HELP_KEYS", "EDITOR_KEYS", "build_key_bindings"]
