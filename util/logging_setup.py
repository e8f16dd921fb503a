"""File logging for the TUI; the terminal itself belongs to prompt_toolkit."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "todotui"
LOG_FILE_NAME = "todotui.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def default_log_dir() -> Path:
    home = Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Logs" / "todotui"
    if sys.platform.startswith("win"):
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / "todotui" / "logs"
    return home / ".local" / "share" / "todotui" / "logs"


def resolve_level(name: str, debug: bool = False) -> int:
    if debug:
        return logging.DEBUG
    return _LEVELS.get((name or "").upper(), logging.WARNING)


def setup_logging(level_name: str = "WARN", debug: bool = False, log_dir: Optional[Path] = None) -> Path:
    """Attach a single file handler to the `todotui` logger and return the log path."""
    directory = Path(log_dir) if log_dir else default_log_dir()
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / LOG_FILE_NAME

    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(resolve_level(level_name, debug))
    root.propagate = False
    root.debug("logging to %s", log_path)
    return log_path


__all__ = ["setup_logging", "default_log_dir", "resolve_level", "LOG_FORMAT"]
