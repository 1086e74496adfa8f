from __future__ import annotations

import logging
from typing import Any, MutableSequence, Optional, TypeVar

from task_scheduler.domain.common.time import TimeLike, add_minutes, as_time
from task_scheduler.domain.schedule.models import Task

logger = logging.getLogger(__name__)

TaskSeq = TypeVar("TaskSeq", bound=MutableSequence[Task])


def calculate_times(tasks: Optional[TaskSeq], start: TimeLike) -> Optional[TaskSeq]:
    """
    Derive start/end times for tasks in list order, in place.

    The first task starts at `start`, each following task starts when the
    previous one ends. None and empty lists are returned untouched. An
    invalid start raises FormatError before any task is modified.
    """
    if not tasks:
        return tasks

    current = as_time(start)
    logger.debug("Recalculating %d task(s) from %s", len(tasks), current)

    for task in tasks:
        end = add_minutes(current, task.duration_minutes)
        task.set_calculated_times(current, end)
        current = end

    return tasks


def validate_times(tasks: Any) -> bool:
    if not isinstance(tasks, (list, tuple)):
        return False
    return all(t.has_valid_times() for t in tasks)
