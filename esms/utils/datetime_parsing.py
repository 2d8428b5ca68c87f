"""Datetime parsing helpers for form payloads."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timezone

DATETIME_FORMATS: list[str] = [
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%d-%m-%Y %H:%M",
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
]

DATE_ONLY_FORMATS = {"%Y-%m-%d", "%Y/%m/%d", "%d/%m/%Y", "%d-%m-%Y"}

TIME_FORMATS: list[str] = ["%H:%M", "%H:%M:%S", "%I:%M %p"]


@dataclass
class ParsedDatetime:
    value: datetime | None
    date_only: bool = False


def parse_datetime(raw_value: str) -> ParsedDatetime:
    """Parse an ISO-8601 or day-first date string into an aware UTC datetime.

    Values without an offset are taken as UTC; date-only values land on
    midnight UTC so they read back as the same calendar date.
    """
    value = raw_value.strip()
    if not value:
        return ParsedDatetime(value=None)

    # ISO 8601 timestamps
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return ParsedDatetime(value=dt.astimezone(timezone.utc), date_only=len(value) == 10)
    except ValueError:
        pass

    for fmt in DATETIME_FORMATS:
        try:
            dt = datetime.strptime(value, fmt)
        except ValueError:
            continue
        return ParsedDatetime(
            value=dt.replace(tzinfo=timezone.utc),
            date_only=fmt in DATE_ONLY_FORMATS,
        )

    return ParsedDatetime(value=None)


def parse_time_of_day(raw_value: str) -> time | None:
    """Parse "HH:MM" style values; ISO datetimes contribute their UTC time."""
    value = raw_value.strip()
    if not value:
        return None
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    parsed = parse_datetime(value)
    if parsed.value is not None and not parsed.date_only:
        return parsed.value.time().replace(tzinfo=None)
    return None


def format_datetime(value: datetime | None) -> str | None:
    """Render as ISO-8601 UTC with millisecond precision and a Z suffix."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_time(value: time | None) -> str | None:
    if value is None:
        return None
    return value.strftime("%H:%M")
