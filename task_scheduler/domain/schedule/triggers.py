"""
Schedule-mutating triggers.

Every trigger takes a Schedule value and returns a new one; the tasks of the
input are cloned first so the caller's copy is never touched, and any error
is raised before a new Schedule exists. All of them end in the same
recalculation, which keeps import, reorder and start-time changes consistent.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional, Tuple, Union

from task_scheduler.domain.common.errors import NotFoundError, ValidationError
from task_scheduler.domain.common.time import TimeOfDay, parse_time, time_from_datetime
from task_scheduler.domain.schedule.calculator import calculate_times
from task_scheduler.domain.schedule.importer import import_batch, merge
from task_scheduler.domain.schedule.models import ImportSummary, Schedule, Task


def _rebuild(tasks: List[Task], start: TimeOfDay) -> Schedule:
    calculate_times(tasks, start)
    return Schedule(tasks=tuple(tasks), start_time=start)


def recalculate(schedule: Schedule) -> Schedule:
    return _rebuild(schedule.clone_tasks(), schedule.start_time)


def on_import(
    schedule: Schedule, raw_rows: Any, source_name: Optional[str] = None
) -> Tuple[Schedule, ImportSummary]:
    result = import_batch(raw_rows, source_name)
    merged = merge(schedule.clone_tasks(), result.tasks)
    return _rebuild(merged, schedule.start_time), result.summary


def on_reorder(schedule: Schedule, from_index: int, to_index: int) -> Schedule:
    size = len(schedule.tasks)
    if not (0 <= from_index < size and 0 <= to_index < size):
        raise ValidationError("Task position out of range")

    tasks = schedule.clone_tasks()
    moved = tasks.pop(from_index)
    tasks.insert(to_index, moved)
    return _rebuild(tasks, schedule.start_time)


def on_start_time_change(schedule: Schedule, new_start: str) -> Schedule:
    start = parse_time(new_start)
    return _rebuild(schedule.clone_tasks(), start)


def on_set_to_now(schedule: Schedule, now: Union[TimeOfDay, datetime]) -> Schedule:
    """Same as a start-time change, using a wall-clock value the caller captured."""
    current = time_from_datetime(now) if isinstance(now, datetime) else now
    return on_start_time_change(schedule, str(current))


def on_update_notes(schedule: Schedule, task_id: str, notes: Optional[str]) -> Schedule:
    if schedule.find(task_id) is None:
        raise NotFoundError(f"Task not found: {task_id}")

    tasks = schedule.clone_tasks()
    for task in tasks:
        if task.id == task_id:
            task.set_notes(notes)
    return Schedule(tasks=tuple(tasks), start_time=schedule.start_time)
