import logging
from pathlib import Path

from core import ParseError, TaskCollection

from .mode_controller import ModeController, Outcome
from .ports import StorageError, TaskStorage

logger = logging.getLogger("todotui.reconciler")


def load_tasks(storage: TaskStorage, path: Path) -> TaskCollection:
    """Read and parse the whole task file; StorageError/ParseError propagate."""
    return TaskCollection.from_lines(storage.load(path))


class ChangeReconciler:
    """Reloads the task file whenever the watcher reports a change.

    Each signal triggers exactly one reload. A failed reload keeps the state
    the controller already holds.
    """

    def __init__(self, storage: TaskStorage, controller: ModeController):
        self.storage = storage
        self.controller = controller

    def on_file_changed(self) -> Outcome:
        path = self.controller.state.todo_path
        try:
            tasks = load_tasks(self.storage, path)
        except (StorageError, ParseError) as exc:
            logger.warning("reload of %s failed, keeping previous tasks: %s", path, exc)
            return Outcome(False, str(exc))
        if tasks == self.controller.state.tasks:
            logger.debug("reload of %s: no task changes", path)
        else:
            logger.info("reloaded %s: %s tasks", path, len(tasks))
        self.controller.replace_tasks(tasks)
        return Outcome(True)


__all__ = ["ChangeReconciler", "load_tasks"]
