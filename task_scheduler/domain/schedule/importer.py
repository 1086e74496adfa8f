"""
Import pipeline: raw tabular rows -> validated tasks + summary.

Rows arrive loosely typed from the tabular source. Each row is checked on
its own; a bad row becomes a RowRejection and the batch carries on.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Union

from task_scheduler.constants import (
    DEFAULT_SOURCE_NAME,
    DURATION_COLUMNS,
    ORDER_ID_COLUMNS,
    TASK_NAME_COLUMNS,
)
from task_scheduler.domain.common.errors import DomainError, ValidationError
from task_scheduler.domain.common.time import MINUTES_PER_DAY, format_duration, parse_duration
from task_scheduler.domain.schedule.models import ImportResult, ImportSummary, RowRejection, Task

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NumericDuration:
    """Spreadsheet time cell: fraction of a day (0.0625 == 1:30)."""

    value: float


@dataclass(frozen=True)
class TextDuration:
    value: str


DurationCell = Union[NumericDuration, TextDuration]


def _pick(row: Mapping[str, Any], columns: Iterable[str]) -> Any:
    """First alias holding a value; blank text cells fall through to the next alias."""
    for col in columns:
        value = row.get(col)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def parse_order_id(value: Any) -> int:
    if value is None:
        raise ValidationError("Missing orderId")
    if isinstance(value, bool):
        raise ValidationError("Invalid orderId format")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        raise ValidationError("Invalid orderId format")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError("Missing orderId")
        try:
            return int(text)
        except ValueError:
            raise ValidationError("Invalid orderId format") from None
    raise ValidationError("Invalid orderId format")


def parse_task_name(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Missing taskName")
    return value.strip()


def classify_duration(value: Any) -> DurationCell:
    if value is None:
        raise ValidationError("Missing estimatedTime")
    if isinstance(value, bool):
        raise ValidationError("Invalid estimatedTime type: bool")
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise ValidationError("Invalid estimatedTime type: non-finite number")
        return NumericDuration(float(value))
    if isinstance(value, str):
        return TextDuration(value)
    raise ValidationError(f"Invalid estimatedTime type: {type(value).__name__}")


def normalize_duration(cell: DurationCell) -> int:
    """
    Bring both cell kinds through the same H:MM validation.

    Numeric fractions are rounded half-up to whole minutes, then rendered as
    text, so 0.0625 and "1:30" end up on one path and equal 90.
    """
    if isinstance(cell, NumericDuration):
        text = format_duration(math.floor(cell.value * MINUTES_PER_DAY + 0.5))
    else:
        text = cell.value.strip()
    return parse_duration(text)


def validate_row(raw: Any, row_number: int) -> Union[Task, RowRejection]:
    if not isinstance(raw, Mapping):
        return RowRejection(row_number=row_number, reason="Row is not a record")

    try:
        order_id = parse_order_id(_pick(raw, ORDER_ID_COLUMNS))
        name = parse_task_name(_pick(raw, TASK_NAME_COLUMNS))
        minutes = normalize_duration(classify_duration(_pick(raw, DURATION_COLUMNS)))
        if minutes == 0:
            raise ValidationError("Zero duration not allowed")
        return Task(order_id=order_id, name=name, duration_minutes=minutes)
    except DomainError as e:
        return RowRejection(row_number=row_number, reason=str(e))


def deduplicate_order_ids(tasks: List[Task]) -> List[Task]:
    """Bump repeated order ids upward, scanning in row order."""
    used = set()
    for task in tasks:
        candidate = task.order_id
        while candidate in used:
            candidate += 1
        task.order_id = candidate
        used.add(candidate)
    return tasks


def import_batch(raw_rows: Any, source_name: Optional[str] = None) -> ImportResult:
    source_name = source_name or DEFAULT_SOURCE_NAME

    if (
        not raw_rows
        or not isinstance(raw_rows, Sequence)
        or isinstance(raw_rows, (str, bytes))
    ):
        return ImportResult(
            tasks=[],
            summary=ImportSummary(accepted_count=0, rejected_count=0, source_name=source_name),
        )

    accepted: List[Task] = []
    rejections: List[RowRejection] = []

    for index, raw in enumerate(raw_rows, start=1):
        outcome = validate_row(raw, index)
        if isinstance(outcome, RowRejection):
            logger.debug("Row %d rejected: %s", outcome.row_number, outcome.reason)
            rejections.append(outcome)
        else:
            accepted.append(outcome)

    deduplicate_order_ids(accepted)

    summary = ImportSummary(
        accepted_count=len(accepted),
        rejected_count=len(rejections),
        source_name=source_name,
        rejections=tuple(rejections),
    )
    logger.info(
        "Imported %s: %d accepted, %d rejected",
        source_name,
        summary.accepted_count,
        summary.rejected_count,
    )
    return ImportResult(tasks=accepted, summary=summary)


def merge(existing: Optional[Iterable[Task]], imported: Optional[Iterable[Task]]) -> List[Task]:
    """Existing tasks followed by imported ones; no re-sort, no cross-batch dedup."""
    return [*(existing or []), *(imported or [])]
