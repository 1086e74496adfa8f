from __future__ import annotations

import math
from typing import Any

from task_scheduler.domain.common.errors import ValidationError


def validate_order_id(value: Any) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Order ID is required")
    if isinstance(value, bool):
        raise ValidationError("Order ID must be a whole number")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise ValidationError("Order ID must be a whole number")
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ValidationError("Order ID must be a whole number") from None
    raise ValidationError("Order ID must be a whole number")


def validate_task_name(value: Any) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Task Name is required")


def validate_duration(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("Estimated Duration must be a number")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError("Estimated Duration must be a number")
        if not value.is_integer():
            raise ValidationError("Estimated Duration must be a whole number of minutes")
    if value <= 0:
        raise ValidationError("Estimated Duration must be greater than 0")
    return int(value)
