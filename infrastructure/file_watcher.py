import logging
import os
import threading
from pathlib import Path
from typing import Callable, Optional, Tuple

from application.events import FileChanged
from infrastructure.todo_repository import file_signature

logger = logging.getLogger("todotui.watcher")

DEFAULT_INTERVAL = 0.3


class WatcherError(Exception):
    """The watcher cannot observe the requested file."""


class FileWatcher:
    """Polls one file's (mtime, size) signature from a daemon thread.

    On every change it calls `emit(FileChanged())`; it never touches
    application state. `emit` is normally `EventQueue.put`.
    """

    def __init__(
        self,
        path: Path,
        emit: Callable[[object], None],
        interval: float = DEFAULT_INTERVAL,
        signature: Callable[[Path], Tuple[int, int]] = file_signature,
    ):
        path = Path(path)
        if interval <= 0:
            raise WatcherError(f"poll interval must be positive, got {interval}")
        if not path.parent.is_dir():
            raise WatcherError(f"cannot watch {path}: directory {path.parent} does not exist")
        if path.exists() and not os.access(path, os.R_OK):
            raise WatcherError(f"cannot watch {path}: file is not readable")
        self.path = path
        self.emit = emit
        self.interval = interval
        self._signature = signature
        self._last = signature(path)
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def poll(self) -> bool:
        """Compare the current signature once; emit and return True on change."""
        current = self._signature(self.path)
        if current == self._last:
            return False
        self._last = current
        logger.debug("change detected on %s: %s", self.path, current)
        self.emit(FileChanged())
        return True

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.poll()
            except Exception as exc:
                logger.error("file watcher poll failed for %s: %s", self.path, exc)

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="todotui-watcher", daemon=True)
        self._thread.start()
        logger.debug("watching %s every %.2fs", self.path, self.interval)

    def stop(self, timeout: float = 1.0) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
        self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()


__all__ = ["FileWatcher", "WatcherError", "DEFAULT_INTERVAL"]
