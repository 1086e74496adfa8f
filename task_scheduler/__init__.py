"""Sequential task scheduling with spreadsheet import validation."""

from task_scheduler.domain.common.errors import DomainError, FormatError, NotFoundError, ValidationError
from task_scheduler.domain.common.time import (
    TimeOfDay,
    add_minutes,
    format_time,
    is_valid_time_format,
    parse_time,
)
from task_scheduler.domain.schedule.calculator import calculate_times
from task_scheduler.domain.schedule.importer import import_batch, merge, validate_row
from task_scheduler.domain.schedule.models import ImportSummary, RowRejection, Schedule, Task
from task_scheduler.domain.schedule.triggers import (
    on_import,
    on_reorder,
    on_set_to_now,
    on_start_time_change,
)

__all__ = [
    "DomainError",
    "FormatError",
    "NotFoundError",
    "ValidationError",
    "TimeOfDay",
    "add_minutes",
    "format_time",
    "is_valid_time_format",
    "parse_time",
    "calculate_times",
    "import_batch",
    "merge",
    "validate_row",
    "ImportSummary",
    "RowRejection",
    "Schedule",
    "Task",
    "on_import",
    "on_reorder",
    "on_set_to_now",
    "on_start_time_change",
]
