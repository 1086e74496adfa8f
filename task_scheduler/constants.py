"""
Constants for import columns, storage areas and defaults.
"""
from __future__ import annotations

# Accepted header spellings per import field (first present wins)
ORDER_ID_COLUMNS = ("orderId", "order id", "Order ID")
TASK_NAME_COLUMNS = ("taskName", "task name", "Task Name")
DURATION_COLUMNS = (
    "estimatedTime",
    "estimated time",
    "Estimated Time",
    "estimated time of completion",
)

DEFAULT_SOURCE_NAME = "unknown.xlsx"

# Storage areas reported by clear_all
AREA_TASKS = "tasks"
AREA_SETTINGS = "settings"
AREA_IMPORT_HISTORY = "import_history"
STORAGE_AREAS = (AREA_TASKS, AREA_SETTINGS, AREA_IMPORT_HISTORY)

# settings table keys
SETTING_START_TIME = "schedule_start_time"

DEFAULT_START_TIME = "09:00"
