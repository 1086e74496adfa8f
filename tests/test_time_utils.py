"""
Unit tests for clock-of-day parsing, formatting and wraparound arithmetic.

Run with: python -m pytest tests/test_time_utils.py -v
"""
from __future__ import annotations

from datetime import datetime

import pytest

from task_scheduler.domain.common.errors import FormatError
from task_scheduler.domain.common.time import (
    TimeOfDay,
    add_minutes,
    format_duration,
    format_time,
    is_valid_time_format,
    parse_duration,
    parse_time,
    time_from_datetime,
)


@pytest.mark.parametrize("value", ["9:00", "09:0", "25:00", "09:60", "", None, "09:00:00", "09-00", " 09:00", "09:00\n", 930])
def test_is_valid_time_format_rejects(value):
    """Single-digit hours, bad ranges, extra segments and non-strings are rejected."""
    assert is_valid_time_format(value) is False


@pytest.mark.parametrize("value", ["00:00", "23:59", "09:30"])
def test_is_valid_time_format_accepts(value):
    assert is_valid_time_format(value) is True


def test_parse_time_returns_structured_value():
    assert parse_time("09:30") == TimeOfDay(hours=9, minutes=30)


def test_parse_time_raises_format_error():
    with pytest.raises(FormatError):
        parse_time("9:30")


def test_format_time_zero_pads():
    assert format_time(TimeOfDay(hours=7, minutes=5)) == "07:05"
    assert str(TimeOfDay(hours=0, minutes=0)) == "00:00"


def test_string_roundtrip_is_lossless():
    """Every valid HH:MM survives parse -> format unchanged."""
    for hours in range(24):
        for minutes in (0, 1, 30, 59):
            text = f"{hours:02d}:{minutes:02d}"
            assert format_time(parse_time(text)) == text


def test_time_of_day_rejects_out_of_range_fields():
    with pytest.raises(FormatError):
        TimeOfDay(hours=24, minutes=0)
    with pytest.raises(FormatError):
        TimeOfDay(hours=10, minutes=60)


def test_add_minutes_simple():
    assert add_minutes(parse_time("09:00"), 30) == parse_time("09:30")


def test_add_minutes_accepts_string():
    assert str(add_minutes("10:15", 60)) == "11:15"


def test_add_minutes_wraps_past_midnight():
    """23:30 + 45 min lands at 00:15."""
    assert str(add_minutes("23:30", 45)) == "00:15"


def test_add_minutes_exactly_one_day_returns_same_time():
    assert str(add_minutes("08:00", 1440)) == "08:00"


def test_add_minutes_chained_across_several_midnights():
    current = parse_time("20:00")
    for _ in range(5):
        current = add_minutes(current, 600)
    # 20:00 + 3000 min = 20:00 + 50h -> 22:00 two days later
    assert str(current) == "22:00"


def test_add_minutes_rejects_negative():
    with pytest.raises(ValueError):
        add_minutes("09:00", -1)


def test_add_minutes_invalid_start_raises_format_error():
    with pytest.raises(FormatError):
        add_minutes("9:00", 10)


@pytest.mark.parametrize(
    "text, minutes",
    [("1:30", 90), ("0:45", 45), ("01:30", 90), ("23:59", 1439), ("0:00", 0), ("9:15", 555)],
)
def test_parse_duration_accepts_one_or_two_hour_digits(text, minutes):
    assert parse_duration(text) == minutes


@pytest.mark.parametrize("text", ["invalid", "25:00", "10:60", "10:5", "", "-1:30", "1:30:00", None])
def test_parse_duration_rejects(text):
    with pytest.raises(FormatError):
        parse_duration(text)


def test_format_duration():
    assert format_duration(90) == "1:30"
    assert format_duration(45) == "0:45"
    assert format_duration(600) == "10:00"
    assert format_duration(-90) == "-1:30"


def test_time_from_datetime_keeps_clock_of_day():
    assert str(time_from_datetime(datetime(2025, 2, 3, 14, 7, 59))) == "14:07"
