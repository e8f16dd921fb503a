"""Filter catalog: tagged filter kinds, predicate dispatch and rebuild with stable selection."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional

from .classifier import (
    CompletedTaskTransitionPolicy,
    is_active,
    is_deleted,
    is_due_today,
    is_listed,
    is_overdue,
    is_this_week,
    should_move_to_completed,
)
from .collection import TaskCollection
from .task import Task

HEADER_GLYPH = "──"
ENTRY_INDENT = "  "

FILTER_ALL_TASKS = "All Tasks"
FILTER_NO_PROJECT = "No Project"
FILTER_COMPLETED_TASKS = "Completed Tasks"
FILTER_DELETED_TASKS = "Deleted Tasks"
FILTER_HEADER_PROJECTS = f"{HEADER_GLYPH} Projects {HEADER_GLYPH}"
FILTER_HEADER_CONTEXTS = f"{HEADER_GLYPH} Contexts {HEADER_GLYPH}"


class TimeBucket(Enum):
    OVERDUE = "Overdue"
    DUE_TODAY = "Due Today"
    THIS_WEEK = "This Week"

    @property
    def label(self) -> str:
        return self.value


TIME_BUCKET_LABELS = frozenset(bucket.label for bucket in TimeBucket)


class FilterType(Enum):
    TIME_BUCKET = "time_bucket"
    ALL_TASKS = "all_tasks"
    NO_PROJECT = "no_project"
    PROJECTS_HEADER = "projects_header"
    PROJECT = "project"
    CONTEXTS_HEADER = "contexts_header"
    CONTEXT = "context"
    COMPLETED_TASKS = "completed_tasks"
    DELETED_TASKS = "deleted_tasks"


HEADER_TYPES = frozenset({FilterType.PROJECTS_HEADER, FilterType.CONTEXTS_HEADER})


@dataclass(frozen=True)
class FilterKind:
    type: FilterType
    name: str = ""
    bucket: Optional[TimeBucket] = None

    @classmethod
    def time_bucket(cls, bucket: TimeBucket) -> "FilterKind":
        return cls(FilterType.TIME_BUCKET, bucket=bucket)

    @classmethod
    def all_tasks(cls) -> "FilterKind":
        return cls(FilterType.ALL_TASKS)

    @classmethod
    def no_project(cls) -> "FilterKind":
        return cls(FilterType.NO_PROJECT)

    @classmethod
    def projects_header(cls) -> "FilterKind":
        return cls(FilterType.PROJECTS_HEADER)

    @classmethod
    def project(cls, name: str) -> "FilterKind":
        return cls(FilterType.PROJECT, name=name)

    @classmethod
    def contexts_header(cls) -> "FilterKind":
        return cls(FilterType.CONTEXTS_HEADER)

    @classmethod
    def context(cls, name: str) -> "FilterKind":
        return cls(FilterType.CONTEXT, name=name)

    @classmethod
    def completed_tasks(cls) -> "FilterKind":
        return cls(FilterType.COMPLETED_TASKS)

    @classmethod
    def deleted_tasks(cls) -> "FilterKind":
        return cls(FilterType.DELETED_TASKS)

    @property
    def is_header(self) -> bool:
        return self.type in HEADER_TYPES

    @property
    def label(self) -> str:
        if self.type is FilterType.TIME_BUCKET:
            return self.bucket.label
        if self.type is FilterType.PROJECT:
            return f"{ENTRY_INDENT}+{self.name}"
        if self.type is FilterType.CONTEXT:
            return f"{ENTRY_INDENT}@{self.name}"
        return _FIXED_LABELS[self.type]


_FIXED_LABELS = {
    FilterType.ALL_TASKS: FILTER_ALL_TASKS,
    FilterType.NO_PROJECT: FILTER_NO_PROJECT,
    FilterType.PROJECTS_HEADER: FILTER_HEADER_PROJECTS,
    FilterType.CONTEXTS_HEADER: FILTER_HEADER_CONTEXTS,
    FilterType.COMPLETED_TASKS: FILTER_COMPLETED_TASKS,
    FilterType.DELETED_TASKS: FILTER_DELETED_TASKS,
}


def is_header_label(label: str) -> bool:
    return HEADER_GLYPH in label


def predicate_for(kind: FilterKind, policy: CompletedTaskTransitionPolicy, now: datetime) -> Callable[[Task], bool]:
    """Single dispatch from filter kind to task predicate."""
    kind_type = kind.type
    if kind_type is FilterType.TIME_BUCKET:
        check = {
            TimeBucket.OVERDUE: is_overdue,
            TimeBucket.DUE_TODAY: is_due_today,
            TimeBucket.THIS_WEEK: is_this_week,
        }[kind.bucket]
        return lambda task: check(task, now)
    if kind_type is FilterType.ALL_TASKS:
        return lambda task: is_listed(task, policy, now)
    if kind_type is FilterType.NO_PROJECT:
        return lambda task: not task.projects and is_listed(task, policy, now)
    if kind_type is FilterType.PROJECT:
        return lambda task: kind.name in task.projects and is_listed(task, policy, now)
    if kind_type is FilterType.CONTEXT:
        return lambda task: kind.name in task.contexts and is_listed(task, policy, now)
    if kind_type is FilterType.COMPLETED_TASKS:
        return lambda task: task.completed and not is_deleted(task) and should_move_to_completed(task, policy, now)
    if kind_type is FilterType.DELETED_TASKS:
        return is_deleted
    return lambda task: False


def select_tasks(
    kind: FilterKind, tasks: TaskCollection, policy: CompletedTaskTransitionPolicy, now: datetime
) -> TaskCollection:
    if kind.is_header:
        return TaskCollection()
    return tasks.filter(predicate_for(kind, policy, now))


@dataclass(frozen=True)
class FilterDescriptor:
    label: str
    kind: FilterKind
    count: int = 0

    @property
    def is_header(self) -> bool:
        return self.kind.is_header

    def apply(self, tasks: TaskCollection, policy: CompletedTaskTransitionPolicy, now: datetime) -> TaskCollection:
        return select_tasks(self.kind, tasks, policy, now)

    def display(self) -> str:
        if self.is_header:
            return self.label
        return f"{self.label} ({self.count})"


@dataclass(frozen=True)
class FilterCatalog:
    entries: List[FilterDescriptor]
    selected_index: int = 0

    def __len__(self) -> int:
        return len(self.entries)

    def labels(self) -> List[str]:
        return [entry.label for entry in self.entries]

    def display_items(self) -> List[str]:
        return [entry.display() for entry in self.entries]

    def index_of(self, label: str) -> int:
        for idx, entry in enumerate(self.entries):
            if entry.label == label:
                return idx
        return -1

    def get(self, index: int) -> Optional[FilterDescriptor]:
        if 0 <= index < len(self.entries):
            return self.entries[index]
        return None


def unique_tags(tasks: TaskCollection, attr: str) -> List[str]:
    """Sorted distinct project/context names found on active tasks."""
    names = set()
    for task in tasks:
        if is_active(task):
            names.update(getattr(task, attr))
    return sorted(names)


def restore_selection(entries: List[FilterDescriptor], previous_label: str) -> int:
    """Index to select after a rebuild, given the label selected before it."""
    for idx, entry in enumerate(entries):
        if entry.label == previous_label:
            return idx
    if previous_label in TIME_BUCKET_LABELS:
        for idx, entry in enumerate(entries):
            if entry.kind.type is FilterType.ALL_TASKS:
                return idx
    return 0


class FilterCatalogBuilder:
    """Rebuilds the whole filter catalog from the current task set."""

    def __init__(self, policy: CompletedTaskTransitionPolicy):
        self.policy = policy

    def _entry(self, kind: FilterKind, tasks: TaskCollection, now: datetime) -> FilterDescriptor:
        count = 0 if kind.is_header else len(select_tasks(kind, tasks, self.policy, now))
        return FilterDescriptor(label=kind.label, kind=kind, count=count)

    def build_entries(self, tasks: TaskCollection, now: datetime) -> List[FilterDescriptor]:
        entries: List[FilterDescriptor] = []
        for bucket in (TimeBucket.OVERDUE, TimeBucket.DUE_TODAY, TimeBucket.THIS_WEEK):
            entry = self._entry(FilterKind.time_bucket(bucket), tasks, now)
            if entry.count:
                entries.append(entry)

        entries.append(self._entry(FilterKind.all_tasks(), tasks, now))
        entries.append(self._entry(FilterKind.no_project(), tasks, now))

        projects = unique_tags(tasks, "projects")
        if projects:
            entries.append(self._entry(FilterKind.projects_header(), tasks, now))
            entries.extend(self._entry(FilterKind.project(name), tasks, now) for name in projects)

        contexts = unique_tags(tasks, "contexts")
        if contexts:
            entries.append(self._entry(FilterKind.contexts_header(), tasks, now))
            entries.extend(self._entry(FilterKind.context(name), tasks, now) for name in contexts)

        entries.append(self._entry(FilterKind.completed_tasks(), tasks, now))

        deleted = self._entry(FilterKind.deleted_tasks(), tasks, now)
        if deleted.count:
            entries.append(deleted)
        return entries

    def build(self, tasks: TaskCollection, previous_label: str, now: datetime) -> FilterCatalog:
        entries = self.build_entries(tasks, now)
        return FilterCatalog(entries=entries, selected_index=restore_selection(entries, previous_label or ""))


__all__ = [
    "HEADER_GLYPH",
    "FILTER_ALL_TASKS",
    "FILTER_NO_PROJECT",
    "FILTER_COMPLETED_TASKS",
    "FILTER_DELETED_TASKS",
    "FILTER_HEADER_PROJECTS",
    "FILTER_HEADER_CONTEXTS",
    "TIME_BUCKET_LABELS",
    "TimeBucket",
    "FilterType",
    "FilterKind",
    "FilterDescriptor",
    "FilterCatalog",
    "FilterCatalogBuilder",
    "is_header_label",
    "predicate_for",
    "select_tasks",
    "unique_tags",
    "restore_selection",
]
