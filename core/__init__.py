from .task import Task, ParseError, is_priority_level, parse_task, serialize_task, DATE_FORMAT, DELETED_PREFIX, DUE_PREFIX
from .collection import TaskCollection
from .classifier import (
    CompletedTaskTransitionPolicy,
    is_deleted,
    is_active,
    is_overdue,
    is_due_today,
    is_this_week,
    should_move_to_completed,
    is_listed,
    week_start,
)
from .filters import (
    FILTER_ALL_TASKS,
    FILTER_NO_PROJECT,
    FILTER_COMPLETED_TASKS,
    FILTER_DELETED_TASKS,
    FILTER_HEADER_PROJECTS,
    FILTER_HEADER_CONTEXTS,
    TimeBucket,
    FilterType,
    FilterKind,
    FilterDescriptor,
    FilterCatalog,
    FilterCatalogBuilder,
    is_header_label,
    select_tasks,
    restore_selection,
)

__all__ = [
    "Task",
    "ParseError",
    "is_priority_level",
    "parse_task",
    "serialize_task",
    "DATE_FORMAT",
    "DELETED_PREFIX",
    "DUE_PREFIX",
    "TaskCollection",
    # Classification
    "CompletedTaskTransitionPolicy",
    "is_deleted",
    "is_active",
    "is_overdue",
    "is_due_today",
    "is_this_week",
    "should_move_to_completed",
    "is_listed",
    "week_start",
    # Filters
    "FILTER_ALL_TASKS",
    "FILTER_NO_PROJECT",
    "FILTER_COMPLETED_TASKS",
    "FILTER_DELETED_TASKS",
    "FILTER_HEADER_PROJECTS",
    "FILTER_HEADER_CONTEXTS",
    "TimeBucket",
    "FilterType",
    "FilterKind",
    "FilterDescriptor",
    "FilterCatalog",
    "FilterCatalogBuilder",
    "is_header_label",
    "select_tasks",
    "restore_selection",
]
