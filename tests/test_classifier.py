from datetime import date, datetime, timedelta

import pytest

from application.task_actions import restore_deleted, soft_delete
from core import (
    CompletedTaskTransitionPolicy,
    DELETED_PREFIX,
    Task,
    is_active,
    is_deleted,
    is_due_today,
    is_listed,
    is_overdue,
    is_this_week,
    parse_task,
    should_move_to_completed,
    week_start,
)

# Wednesday
NOW = datetime(2024, 3, 6, 14, 30)


def test_week_starts_on_sunday():
    assert week_start(NOW) == date(2024, 3, 3)
    assert week_start(date(2024, 3, 3)) == date(2024, 3, 3)
    assert week_start(date(2024, 3, 9)) == date(2024, 3, 3)
    assert week_start(date(2024, 3, 10)) == date(2024, 3, 10)


def test_due_predicates_compare_calendar_days():
    overdue = Task(description="a", due=date(2024, 3, 5))
    today = Task(description="b", due=date(2024, 3, 6))
    saturday = Task(description="c", due=date(2024, 3, 9))
    next_sunday = Task(description="d", due=date(2024, 3, 10))

    assert is_overdue(overdue, NOW)
    assert not is_overdue(today, NOW)
    assert is_due_today(today, NOW)
    assert is_due_today(today, datetime(2024, 3, 6, 23, 59))
    assert not is_due_today(today, datetime(2024, 3, 7, 0, 0))
    assert is_this_week(overdue, NOW)
    assert is_this_week(saturday, NOW)
    assert not is_this_week(next_sunday, NOW)


def test_time_buckets_ignore_completed_and_deleted_tasks():
    done = Task(description="a", due=date(2024, 3, 1), completed=True)
    gone = Task(description="b", due=date(2024, 3, 6), deleted_at=date(2024, 3, 6))
    undated = Task(description="c")

    for task in (done, gone, undated):
        assert not is_overdue(task, NOW)
        assert not is_due_today(task, NOW)
        assert not is_this_week(task, NOW)


@pytest.mark.parametrize(
    "line",
    [
        "plain",
        "x 2024-01-01 done",
        "gone deleted_at:2024-01-01",
        "x both deleted_at:2024-01-01T10:00",
        "check url=deleted_at:2024-01-01 later",
        "junk deleted_at:soon",
    ],
)
def test_deleted_flag_matches_serialized_marker(line):
    task = parse_task(line)
    assert is_deleted(task) == (DELETED_PREFIX in task.serialize())


def test_marker_inside_a_word_counts_as_deleted():
    task = parse_task("check url=deleted_at:2024-01-01 later")

    assert is_deleted(task)
    assert not is_active(task)
    assert soft_delete(task, NOW) is task

    restored = restore_deleted(task)
    assert not is_deleted(restored)
    assert restored.serialize() == "check url= later"


def test_active_means_neither_completed_nor_deleted():
    assert is_active(Task(description="a"))
    assert not is_active(Task(description="a", completed=True))
    assert not is_active(Task(description="a", deleted_at=date(2024, 1, 1)))


def test_zero_delay_moves_completed_task_immediately():
    policy = CompletedTaskTransitionPolicy(delay_days=0)
    task = Task(description="a", completed=True, completion_date=NOW - timedelta(minutes=1))

    assert should_move_to_completed(task, policy, NOW)
    assert not is_listed(task, policy, NOW)


def test_delayed_transition_waits_for_transition_hour_on_target_day():
    policy = CompletedTaskTransitionPolicy(delay_days=1, transition_hour=3)
    task = Task(description="a", completed=True, completion_date=datetime(2024, 3, 4, 1, 0))

    before = datetime(2024, 3, 5, 2, 0)
    after = datetime(2024, 3, 5, 4, 0)
    assert before - task.completion_date == timedelta(hours=25)
    assert not should_move_to_completed(task, policy, before)
    assert is_listed(task, policy, before)
    assert should_move_to_completed(task, policy, after)
    assert not is_listed(task, policy, after)


def test_completed_task_without_date_never_moves():
    policy = CompletedTaskTransitionPolicy(delay_days=0)
    task = Task(description="a", completed=True)

    assert not should_move_to_completed(task, policy, NOW)
    assert is_listed(task, policy, NOW)


def test_open_task_never_moves():
    policy = CompletedTaskTransitionPolicy(delay_days=0)
    assert not should_move_to_completed(Task(description="a"), policy, NOW)


@pytest.mark.parametrize("kwargs", [{"delay_days": -1}, {"transition_hour": 24}, {"transition_hour": -1}])
def test_policy_rejects_out_of_range_values(kwargs):
    with pytest.raises(ValueError):
        CompletedTaskTransitionPolicy(**kwargs)
