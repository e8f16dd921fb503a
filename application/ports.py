from pathlib import Path
from typing import List, Protocol

from core import TaskCollection


class StorageError(Exception):
    """Loading or saving the task file failed."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class TaskStorage(Protocol):
    def load(self, path: Path) -> List[str]:
        ...

    def save(self, tasks: TaskCollection, path: Path) -> None:
        ...


__all__ = ["StorageError", "TaskStorage"]
