"""Task mutations used by the controller.

Each function returns a new Task; the caller writes it back into the
collection by index. Soft delete and restore agree with `is_deleted`: a task
is deleted as long as its line carries the `deleted_at:` marker anywhere.
"""

import re
from dataclasses import replace
from datetime import date, datetime
from typing import Sequence, Union

from core import DATE_FORMAT, DELETED_PREFIX, Task, is_deleted, parse_task

_INLINE_MARKER_RE = re.compile(re.escape(DELETED_PREFIX) + r"\S*")


def _today(now: Union[date, datetime]) -> date:
    return now.date() if isinstance(now, datetime) else now


def toggle_completion(task: Task, now: datetime) -> Task:
    if task.completed:
        return replace(task, completed=False, completion_date=None)
    return replace(task, completed=True, completion_date=now)


def soft_delete(task: Task, now: Union[date, datetime]) -> Task:
    if is_deleted(task):
        return task
    return parse_task(f"{task.serialize()} {DELETED_PREFIX}{_today(now).strftime(DATE_FORMAT)}")


def restore_deleted(task: Task) -> Task:
    """Drop the standalone marker and strip markers glued inside words."""
    if not is_deleted(task):
        return task
    words = []
    for word in task.description.split():
        stripped = _INLINE_MARKER_RE.sub("", word)
        if stripped:
            words.append(stripped)
    return parse_task(replace(task, description=" ".join(words), deleted_at=None).serialize())


def cycle_priority(task: Task, levels: Sequence[str]) -> Task:
    """Advance to the next configured priority level, wrapping around.

    An unknown current priority counts as index 0 (the "no priority" slot).
    """
    if not levels:
        raise ValueError("priority levels cannot be empty")
    try:
        current = list(levels).index(task.priority)
    except ValueError:
        current = 0
    return replace(task, priority=levels[(current + 1) % len(levels)])


def toggle_due_today(task: Task, now: Union[date, datetime]) -> Task:
    today = _today(now)
    if task.due == today:
        return replace(task, due=None)
    return replace(task, due=today)


__all__ = ["toggle_completion", "soft_delete", "restore_deleted", "cycle_priority", "toggle_due_today"]
