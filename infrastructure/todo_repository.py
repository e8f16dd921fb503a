import logging
from pathlib import Path
from typing import List, Tuple

from core import TaskCollection
from application.ports import StorageError, TaskStorage

logger = logging.getLogger("todotui.storage")


def file_signature(path: Path) -> Tuple[int, int]:
    """(mtime_ns, size) of `path`; (0, 0) when it cannot be stat'ed."""
    try:
        stat = path.stat()
    except OSError:
        return (0, 0)
    return (int(stat.st_mtime_ns), int(stat.st_size))


class TodoFileRepository(TaskStorage):
    """todo.txt on disk: one serialized task per line, UTF-8."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def load(self, path: Path) -> List[str]:
        path = Path(path)
        try:
            if not path.exists():
                path.parent.mkdir(parents=True, exist_ok=True)
                path.touch()
                logger.info("created empty todo file %s", path)
                return []
            text = path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(path, f"cannot read: {exc}") from exc
        lines = [line for line in text.splitlines() if line.strip()]
        logger.debug("loaded %s lines from %s", len(lines), path)
        return lines

    def save(self, tasks: TaskCollection, path: Path) -> None:
        path = Path(path)
        content = "".join(f"{line}\n" for line in tasks.lines())
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding=self.encoding)
        except OSError as exc:
            raise StorageError(path, f"cannot write: {exc}") from exc
        logger.debug("saved %s tasks to %s", len(tasks), path)


__all__ = ["TodoFileRepository", "file_signature"]
