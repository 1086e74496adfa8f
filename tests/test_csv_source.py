from pathlib import Path

import pytest

from task_scheduler.domain.schedule.importer import import_batch
from task_scheduler.infra.tabular.csv_source import read_csv_rows


def test_read_csv_rows_keys_by_header(tmp_path: Path) -> None:
    path = tmp_path / "tasks.csv"
    path.write_text(
        "Order ID,Task Name,Estimated Time\n"
        "1,Initialize Project,0:30\n"
        ",,\n"
        "2,Setup Environment,0:45\n",
        encoding="utf-8",
    )

    source = read_csv_rows(path)

    assert source.source_name == "tasks.csv"
    assert source.rows == [
        {"Order ID": "1", "Task Name": "Initialize Project", "Estimated Time": "0:30"},
        {"Order ID": "2", "Task Name": "Setup Environment", "Estimated Time": "0:45"},
    ]


def test_read_csv_rows_strips_bom_and_feeds_import(tmp_path: Path) -> None:
    path = tmp_path / "export.csv"
    path.write_text(
        "\ufefforderId,taskName,estimatedTime\n"
        "1,A,1:30\n"
        "1,B,0:00\n"
        "1,C,0:15\n",
        encoding="utf-8",
    )

    source = read_csv_rows(path)
    result = import_batch(source.rows, source.source_name)

    assert [t.name for t in result.tasks] == ["A", "C"]
    assert [t.order_id for t in result.tasks] == [1, 2]
    assert result.summary.rejected_count == 1
    assert result.summary.rejections[0].row_number == 2


def test_read_csv_rows_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_csv_rows(tmp_path / "nope.csv")


def test_blank_duration_cell_reported_as_missing(tmp_path: Path) -> None:
    path = tmp_path / "tasks.csv"
    path.write_text("Order ID,Task Name,Estimated Time\n1,A,\n", encoding="utf-8")

    result = import_batch(read_csv_rows(path).rows, "tasks.csv")

    assert result.summary.accepted_count == 0
    assert result.summary.rejections[0].reason == "Missing estimatedTime"


def test_numeric_duration_cell_is_fraction_of_day(tmp_path: Path) -> None:
    """Durations exported as day fractions import the same as H:MM text."""
    path = tmp_path / "tasks.csv"
    path.write_text(
        "Order ID,Task Name,Estimated Time\n"
        "1,A,0.0625\n"
        "2,B,1:30\n"
        "3,C,abc\n",
        encoding="utf-8",
    )

    source = read_csv_rows(path)
    assert source.rows[0]["Estimated Time"] == 0.0625
    assert source.rows[1]["Estimated Time"] == "1:30"

    result = import_batch(source.rows, source.source_name)
    assert [t.duration_minutes for t in result.tasks] == [90, 90]
    assert result.summary.rejections[0].reason == "Invalid time format: abc. Expected HH:MM"
