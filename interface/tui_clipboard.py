"""Clipboard access for the TUI."""

import logging
import subprocess
from typing import TYPE_CHECKING

from prompt_toolkit.clipboard import ClipboardData, InMemoryClipboard

try:
    from prompt_toolkit.clipboard.pyperclip import PyperclipClipboard
except ImportError:
    PyperclipClipboard = None  # type: ignore[misc,assignment]

if TYPE_CHECKING:
    from prompt_toolkit.clipboard import Clipboard

logger = logging.getLogger("todotui.app")

COPY_COMMANDS = (
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard", "-in"],
    ["clip.exe"],
)


def build_clipboard() -> "Clipboard":
    """System clipboard through pyperclip when usable, in-memory otherwise."""
    if PyperclipClipboard:
        try:
            return PyperclipClipboard()
        except Exception as exc:
            logger.debug("pyperclip clipboard unavailable: %s", exc)
    return InMemoryClipboard()


def copy_text(clipboard: "Clipboard", text: str) -> bool:
    """Copy `text`; falls back to native copy commands. Returns success."""
    payload = str(text or "")
    if not payload:
        return False
    if clipboard is not None and not isinstance(clipboard, InMemoryClipboard):
        try:
            clipboard.set_data(ClipboardData(payload))
            return True
        except Exception as exc:
            logger.debug("clipboard set_data failed: %s", exc)
    for cmd in COPY_COMMANDS:
        try:
            result = subprocess.run(cmd, input=payload, text=True, timeout=1, capture_output=True)
        except (OSError, subprocess.SubprocessError):
            continue
        if result.returncode == 0:
            return True
    if clipboard is not None:
        clipboard.set_data(ClipboardData(payload))
    logger.warning("no system clipboard available; copy kept in memory only")
    return False


__all__ = ["build_clipboard", "copy_text"]
