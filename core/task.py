"""todo.txt task model and single-line codec."""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Tuple, Union

DATE_FORMAT = "%Y-%m-%d"
DUE_PREFIX = "due:"
DELETED_PREFIX = "deleted_at:"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_PRIORITY_RE = re.compile(r"^\(([A-Z])\)$")
_PRIORITY_LETTER_RE = re.compile(r"^[A-Z]$")
_DATETIME_FORMATS = ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M", "%Y-%m-%d")


class ParseError(ValueError):
    """Raised when a line cannot be read as a todo.txt task."""

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"{reason}: {line!r}")


MarkerValue = Union[date, datetime, str]


@dataclass(frozen=True)
class Task:
    """Single todo.txt record.

    `description` keeps the free text verbatim (inline +project/@context
    tokens included); `due` and a standalone `deleted_at:` token are lifted
    out of it and written back as trailing tokens by `serialize`. A marker
    glued inside a word (`url=deleted_at:...`) stays in the description and
    still counts as deleted.
    """

    description: str
    priority: str = ""
    projects: Tuple[str, ...] = ()
    contexts: Tuple[str, ...] = ()
    due: Optional[date] = None
    completed: bool = False
    completion_date: Optional[datetime] = None
    creation_date: Optional[date] = None
    # raw text when the marker value is not a date
    deleted_at: Optional[MarkerValue] = None

    def has_due_date(self) -> bool:
        return self.due is not None

    def has_priority(self) -> bool:
        return bool(self.priority)

    def has_deleted_marker(self) -> bool:
        """True when the serialized line carries `deleted_at:` anywhere."""
        return self.deleted_at is not None or DELETED_PREFIX in self.description

    def serialize(self) -> str:
        return serialize_task(self)

    def __str__(self) -> str:
        return serialize_task(self)


def _parse_date(token: str, line: str) -> date:
    try:
        return datetime.strptime(token, DATE_FORMAT).date()
    except ValueError as exc:
        raise ParseError(line, f"invalid date {token!r}") from exc


def _parse_marker_value(value: str) -> MarkerValue:
    for fmt in _DATETIME_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return parsed.date() if fmt == DATE_FORMAT else parsed
    return value


def _format_marker_value(value: MarkerValue) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        if value.second:
            return value.strftime("%Y-%m-%dT%H:%M:%S")
        return value.strftime("%Y-%m-%dT%H:%M")
    return value.strftime(DATE_FORMAT)


def _collect_tags(words: List[str]) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    projects: List[str] = []
    contexts: List[str] = []
    for word in words:
        if len(word) > 1 and word[0] == "+":
            if word[1:] not in projects:
                projects.append(word[1:])
        elif len(word) > 1 and word[0] == "@":
            if word[1:] not in contexts:
                contexts.append(word[1:])
    return tuple(projects), tuple(contexts)


def parse_task(line: str) -> Task:
    """Parse a single todo.txt line into a Task."""
    if "\n" in line.strip("\r\n") or "\r" in line.strip("\r\n"):
        raise ParseError(line, "task must be a single line")
    words = line.strip().split()
    if not words:
        raise ParseError(line, "empty task")

    completed = False
    completion_date: Optional[datetime] = None
    creation_date: Optional[date] = None
    priority = ""

    if words[0] == "x":
        completed = True
        words = words[1:]
        if words and _PRIORITY_RE.match(words[0]):
            priority = words[0][1]
            words = words[1:]
        if words and _DATE_RE.match(words[0]):
            completion_date = datetime.combine(_parse_date(words[0], line), datetime.min.time())
            words = words[1:]
    if words and not priority and _PRIORITY_RE.match(words[0]):
        priority = words[0][1]
        words = words[1:]
    if words and _DATE_RE.match(words[0]):
        creation_date = _parse_date(words[0], line)
        words = words[1:]

    due: Optional[date] = None
    deleted_at: Optional[MarkerValue] = None
    body: List[str] = []
    for word in words:
        if word.startswith(DUE_PREFIX) and len(word) > len(DUE_PREFIX):
            due = _parse_date(word[len(DUE_PREFIX):], line)
        elif word.startswith(DELETED_PREFIX):
            deleted_at = _parse_marker_value(word[len(DELETED_PREFIX):])
        else:
            body.append(word)

    if not body:
        raise ParseError(line, "task has no description")
    projects, contexts = _collect_tags(body)
    return Task(
        description=" ".join(body),
        priority=priority,
        projects=projects,
        contexts=contexts,
        due=due,
        completed=completed,
        completion_date=completion_date,
        creation_date=creation_date,
        deleted_at=deleted_at,
    )


def is_priority_level(value: str) -> bool:
    """Whether `value` can be stored as a priority: empty or one letter A-Z."""
    return value == "" or bool(_PRIORITY_LETTER_RE.match(value))


def serialize_task(task: Task) -> str:
    parts: List[str] = []
    if task.completed:
        parts.append("x")
    if task.priority:
        parts.append(f"({task.priority})")
    if task.completed and task.completion_date is not None:
        parts.append(task.completion_date.strftime(DATE_FORMAT))
    if task.creation_date is not None:
        parts.append(task.creation_date.strftime(DATE_FORMAT))
    parts.append(task.description)
    if task.due is not None:
        parts.append(DUE_PREFIX + task.due.strftime(DATE_FORMAT))
    if task.deleted_at is not None:
        parts.append(DELETED_PREFIX + _format_marker_value(task.deleted_at))
    return " ".join(parts)


__all__ = [
    "DATE_FORMAT",
    "DUE_PREFIX",
    "DELETED_PREFIX",
    "ParseError",
    "Task",
    "is_priority_level",
    "parse_task",
    "serialize_task",
]
