"""Tests for payload date parsing and rendering."""

from datetime import datetime, time, timezone

import pytest

from esms.utils.datetime_parsing import (
    format_datetime,
    format_time,
    parse_datetime,
    parse_time_of_day,
)


@pytest.mark.parametrize(
    "raw,expected,date_only",
    [
        ("2024-03-01", datetime(2024, 3, 1, tzinfo=timezone.utc), True),
        ("2024-03-01T10:15:00Z", datetime(2024, 3, 1, 10, 15, tzinfo=timezone.utc), False),
        ("2024-03-01T12:15:00+02:00", datetime(2024, 3, 1, 10, 15, tzinfo=timezone.utc), False),
        ("2024-03-01 10:15", datetime(2024, 3, 1, 10, 15, tzinfo=timezone.utc), False),
        ("01/03/2024", datetime(2024, 3, 1, tzinfo=timezone.utc), True),
        ("01-03-2024 08:30", datetime(2024, 3, 1, 8, 30, tzinfo=timezone.utc), False),
    ],
)
def test_parse_datetime(raw, expected, date_only):
    parsed = parse_datetime(raw)
    assert parsed.value == expected
    assert parsed.date_only is date_only


@pytest.mark.parametrize("raw", ["", "   ", "yesterday", "2024-13-45"])
def test_parse_datetime_rejects_garbage(raw):
    assert parse_datetime(raw).value is None


def test_parse_time_of_day():
    assert parse_time_of_day("14:30") == time(14, 30)
    assert parse_time_of_day("02:30 PM") == time(14, 30)
    assert parse_time_of_day("2024-03-01T14:30:00Z") == time(14, 30)
    assert parse_time_of_day("2024-03-01") is None
    assert parse_time_of_day("late") is None


def test_format_datetime_is_utc_with_milliseconds():
    value = datetime(2024, 3, 1, 12, 15, 30, 123456, tzinfo=timezone.utc)
    assert format_datetime(value) == "2024-03-01T12:15:30.123Z"
    assert format_datetime(datetime(2024, 3, 1)) == "2024-03-01T00:00:00.000Z"
    assert format_datetime(None) is None


def test_format_time():
    assert format_time(time(9, 5)) == "09:05"
    assert format_time(None) is None
