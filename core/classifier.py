"""Time and lifecycle predicates over a single task.

All date comparisons are day-granular: both sides are reduced to calendar
days before comparing. Overdue / due-today / this-week never match deleted or
completed tasks.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Union

from .task import Task

Instant = Union[date, datetime]


@dataclass(frozen=True)
class CompletedTaskTransitionPolicy:
    """When a completed task leaves the regular filters for "Completed Tasks"."""

    delay_days: int = 0
    transition_hour: int = 5

    def __post_init__(self):
        if self.delay_days < 0:
            raise ValueError(f"delay_days must be >= 0, got {self.delay_days}")
        if not 0 <= self.transition_hour <= 23:
            raise ValueError(f"transition_hour must be in [0, 23], got {self.transition_hour}")


def _day(value: Instant) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def week_start(now: Instant) -> date:
    """Sunday of the week containing `now`."""
    today = _day(now)
    # date.weekday() is Monday=0; shift so Sunday=0
    return today - timedelta(days=(today.weekday() + 1) % 7)


def is_deleted(task: Task) -> bool:
    return task.has_deleted_marker()


def is_active(task: Task) -> bool:
    return not task.completed and not is_deleted(task)


def _dated_and_active(task: Task) -> bool:
    return task.has_due_date() and is_active(task)


def is_overdue(task: Task, now: Instant) -> bool:
    if not _dated_and_active(task):
        return False
    return task.due < _day(now)


def is_due_today(task: Task, now: Instant) -> bool:
    if not _dated_and_active(task):
        return False
    return task.due == _day(now)


def is_this_week(task: Task, now: Instant) -> bool:
    if not _dated_and_active(task):
        return False
    start = week_start(now)
    return start <= task.due < start + timedelta(days=7)


def should_move_to_completed(task: Task, policy: CompletedTaskTransitionPolicy, now: datetime) -> bool:
    """True once a completed task belongs only under "Completed Tasks"."""
    if not task.completed or task.completion_date is None:
        return False
    if policy.delay_days == 0:
        return True
    target_day = _day(task.completion_date) + timedelta(days=policy.delay_days)
    target = datetime.combine(target_day, time(hour=policy.transition_hour), tzinfo=now.tzinfo)
    return now >= target


def is_listed(task: Task, policy: CompletedTaskTransitionPolicy, now: datetime) -> bool:
    """Visible under All Tasks / No Project / project / context filters."""
    if is_deleted(task):
        return False
    if not task.completed:
        return True
    return not should_move_to_completed(task, policy, now)


__all__ = [
    "CompletedTaskTransitionPolicy",
    "week_start",
    "is_deleted",
    "is_active",
    "is_overdue",
    "is_due_today",
    "is_this_week",
    "should_move_to_completed",
    "is_listed",
]
