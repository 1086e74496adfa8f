from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from task_scheduler.domain.common.time import (
    TimeOfDay,
    add_minutes,
    is_valid_time_format,
    parse_time,
)
from task_scheduler.domain.schedule.rules import (
    validate_duration,
    validate_order_id,
    validate_task_name,
)

DEFAULT_START_TIME = TimeOfDay(hours=9, minutes=0)
UNSET_TIME = "--:--"


def new_task_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Task:
    """
    One schedulable unit.

    start_time/end_time are derived values written by the calculator only;
    notes are the single user-editable field after creation.
    """

    order_id: int
    name: str
    duration_minutes: int
    id: str = field(default_factory=new_task_id)
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: str = ""

    def __post_init__(self) -> None:
        self.validate()
        if not self.id:
            self.id = new_task_id()
        if self.notes is None:
            self.notes = ""

    def validate(self) -> bool:
        self.order_id = validate_order_id(self.order_id)
        validate_task_name(self.name)
        self.duration_minutes = validate_duration(self.duration_minutes)
        return True

    def set_notes(self, notes: Optional[str]) -> None:
        self.notes = notes or ""

    def set_calculated_times(self, start: TimeOfDay, end: TimeOfDay) -> None:
        self.start_time = str(start)
        self.end_time = str(end)

    def formatted_start_time(self) -> str:
        return self.start_time or UNSET_TIME

    def formatted_end_time(self) -> str:
        return self.end_time or UNSET_TIME

    def has_valid_times(self) -> bool:
        """Both times present, well formed and end == start + duration."""
        if not (is_valid_time_format(self.start_time) and is_valid_time_format(self.end_time)):
            return False
        return str(add_minutes(self.start_time, self.duration_minutes)) == self.end_time

    def clone(self) -> "Task":
        return replace(self)

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "orderId": self.order_id,
            "taskName": self.name,
            "estimatedDuration": self.duration_minutes,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "notes": self.notes,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Task":
        return cls(
            id=record.get("id") or new_task_id(),
            order_id=record.get("orderId"),
            name=record.get("taskName"),
            duration_minutes=record.get("estimatedDuration"),
            start_time=record.get("startTime"),
            end_time=record.get("endTime"),
            notes=record.get("notes") or "",
        )


@dataclass(frozen=True)
class Schedule:
    tasks: Tuple[Task, ...] = ()
    start_time: TimeOfDay = DEFAULT_START_TIME

    @classmethod
    def empty(cls, start_time: TimeOfDay = DEFAULT_START_TIME) -> "Schedule":
        return cls(tasks=(), start_time=start_time)

    def clone_tasks(self) -> List[Task]:
        return [t.clone() for t in self.tasks]

    def find(self, task_id: str) -> Optional[Task]:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def to_record(self) -> Dict[str, Any]:
        return {
            "tasks": [t.to_record() for t in self.tasks],
            "scheduleStartTime": str(self.start_time),
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Schedule":
        raw_start = record.get("scheduleStartTime")
        start = parse_time(raw_start) if raw_start else DEFAULT_START_TIME
        tasks = tuple(Task.from_record(r) for r in record.get("tasks") or [])
        return cls(tasks=tasks, start_time=start)


@dataclass(frozen=True)
class RowRejection:
    row_number: int
    reason: str

    def to_record(self) -> Dict[str, Any]:
        return {"rowNumber": self.row_number, "reason": self.reason}


@dataclass(frozen=True)
class ImportSummary:
    accepted_count: int
    rejected_count: int
    source_name: str
    rejections: Tuple[RowRejection, ...] = ()
    imported_at: Optional[str] = None

    @property
    def fully_accepted(self) -> bool:
        return self.rejected_count == 0

    def stamped(self, imported_at: str) -> "ImportSummary":
        return replace(self, imported_at=imported_at)

    def to_record(self) -> Dict[str, Any]:
        return {
            "acceptedCount": self.accepted_count,
            "rejectedCount": self.rejected_count,
            "sourceName": self.source_name,
            "rejections": [r.to_record() for r in self.rejections],
            "importedAt": self.imported_at,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ImportSummary":
        return cls(
            accepted_count=int(record.get("acceptedCount") or 0),
            rejected_count=int(record.get("rejectedCount") or 0),
            source_name=record.get("sourceName") or "",
            rejections=tuple(
                RowRejection(row_number=int(r["rowNumber"]), reason=r["reason"])
                for r in record.get("rejections") or []
            ),
            imported_at=record.get("importedAt"),
        )


@dataclass(frozen=True)
class ImportResult:
    tasks: List[Task]
    summary: ImportSummary


@dataclass(frozen=True)
class ClearResult:
    success: bool
    areas: Dict[str, bool]
    errors: Tuple[str, ...] = ()
