"""CSV tabular source: header-keyed raw rows for the import pipeline."""
from __future__ import annotations

import csv
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

from task_scheduler.constants import DURATION_COLUMNS


@dataclass(frozen=True)
class TabularSource:
    rows: List[Dict[str, Any]]
    source_name: str


def _duration_cell(value: str) -> Union[str, float]:
    # spreadsheet time cells export as a fraction of a day ("0.0625" == 1:30)
    text = value.strip()
    if not text or ":" in text:
        return value
    try:
        number = float(text)
    except ValueError:
        return value
    return number if math.isfinite(number) else value


def read_csv_rows(path: Path | str) -> TabularSource:
    """
    Read a CSV export of the task sheet.

    Cells stay strings except numeric duration cells, which become floats so
    they go through the fraction-of-a-day path like native spreadsheet values.
    """
    csv_path = Path(path)
    with csv_path.open("r", newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        rows: List[Dict[str, Any]] = []
        for row in reader:
            cells: Dict[str, Any] = {key: value for key, value in row.items() if key is not None}
            if not any((value or "").strip() for value in cells.values()):
                continue
            for key in DURATION_COLUMNS:
                if isinstance(cells.get(key), str):
                    cells[key] = _duration_cell(cells[key])
            rows.append(cells)

    return TabularSource(rows=rows, source_name=csv_path.name)
