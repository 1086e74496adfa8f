"""
Unit tests for sequential start/end time calculation.
"""
from __future__ import annotations

import pytest

from task_scheduler.domain.common.errors import FormatError
from task_scheduler.domain.common.time import add_minutes, parse_time
from task_scheduler.domain.schedule.calculator import calculate_times, validate_times
from task_scheduler.domain.schedule.models import Task


def _tasks(*durations):
    return [Task(order_id=i + 1, name=f"Task {i + 1}", duration_minutes=d) for i, d in enumerate(durations)]


def _pairs(tasks):
    return [(t.start_time, t.end_time) for t in tasks]


def test_end_to_end_three_tasks_from_nine():
    tasks = calculate_times(_tasks(30, 45, 60), "09:00")
    assert _pairs(tasks) == [("09:00", "09:30"), ("09:30", "10:15"), ("10:15", "11:15")]


def test_calculate_mutates_in_place_and_returns_same_list():
    tasks = _tasks(30)
    result = calculate_times(tasks, parse_time("08:00"))
    assert result is tasks
    assert tasks[0].start_time == "08:00"


def test_single_task_wraps_midnight():
    tasks = calculate_times(_tasks(45), "23:30")
    assert _pairs(tasks) == [("23:30", "00:15")]


def test_chain_continues_after_midnight():
    tasks = calculate_times(_tasks(60, 90, 30), "22:30")
    assert _pairs(tasks) == [("22:30", "23:30"), ("23:30", "01:00"), ("01:00", "01:30")]


def test_chaining_invariant():
    """Each task starts exactly where the previous one ended."""
    tasks = calculate_times(_tasks(17, 240, 5, 600, 1, 720), "13:13")
    for prev, nxt in zip(tasks, tasks[1:]):
        assert nxt.start_time == prev.end_time


def test_sequential_sum_invariant():
    """start + sum(durations) mod 1440 equals the last end time."""
    durations = (300, 420, 600, 45, 15, 900)
    tasks = calculate_times(_tasks(*durations), "06:45")
    assert tasks[-1].end_time == str(add_minutes("06:45", sum(durations) % 1440))


def test_idempotent():
    tasks = _tasks(30, 45, 60)
    calculate_times(tasks, "09:00")
    first = _pairs(tasks)
    calculate_times(tasks, "09:00")
    assert _pairs(tasks) == first


def test_empty_list_is_noop():
    tasks = []
    assert calculate_times(tasks, "09:00") is tasks
    assert tasks == []


def test_none_is_returned_unchanged():
    assert calculate_times(None, "09:00") is None


@pytest.mark.parametrize("start", ["9:00", "25:00", "", None, "09:00:00"])
def test_invalid_start_raises_before_mutating(start):
    tasks = _tasks(30, 45)
    calculate_times(tasks, "09:00")
    before = _pairs(tasks)

    with pytest.raises(FormatError):
        calculate_times(tasks, start)
    assert _pairs(tasks) == before


def test_every_task_has_valid_times_after_calculation():
    tasks = calculate_times(_tasks(30, 45, 60, 1439), "12:00")
    assert validate_times(tasks) is True
    assert all(t.has_valid_times() for t in tasks)


def test_validate_times_false_for_uncomputed_or_non_list():
    assert validate_times(_tasks(30)) is False
    assert validate_times(None) is False
    assert validate_times([]) is True
