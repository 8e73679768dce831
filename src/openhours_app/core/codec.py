from __future__ import annotations

import re
from typing import Any

from openhours_app.core.builder import CLOSES_PATTERN, OPENS_PATTERN
from openhours_app.core.models import (
    ALWAYS_OPEN,
    BY_APPOINTMENT,
    WEEKDAYS,
    OpeningHoursEntry,
    SpecialSchedule,
    StructuredOpeningHours,
    Weekday,
    closed_entry,
)

_OPENS_RE = re.compile(OPENS_PATTERN)
_CLOSES_RE = re.compile(CLOSES_PATTERN)
_SINGLE_DIGIT_HOUR_RE = re.compile(r"^\d:")


def encode_structured_hours(schedule: StructuredOpeningHours) -> dict[str, Any]:
    return {
        "entries": [
            {"day": entry.day, "opens": entry.opens, "closes": entry.closes}
            for entry in schedule.entries
        ],
        "special": schedule.special,
    }


def decode_structured_hours(data: Any) -> StructuredOpeningHours | None:
    """Read a stored schedule back; returns None when ``data`` is not one.

    The result always satisfies the builder's shape: a special schedule has no
    entries, anything else has exactly one entry per weekday, Monday first.
    """
    if not isinstance(data, dict):
        return None

    special = _decode_special(data.get("special"))
    if special is not None:
        return StructuredOpeningHours(entries=(), special=special)

    raw_entries = data.get("entries")
    if not isinstance(raw_entries, list):
        return None

    by_day: dict[Weekday, OpeningHoursEntry] = {}
    for raw in raw_entries:
        if not isinstance(raw, dict):
            continue
        day = raw.get("day")
        if day not in WEEKDAYS:
            continue
        opens = _decode_time(raw.get("opens"), _OPENS_RE)
        closes = _decode_time(raw.get("closes"), _CLOSES_RE)
        if opens is None or closes is None:
            by_day[day] = closed_entry(day)
        else:
            by_day[day] = OpeningHoursEntry(day=day, opens=opens, closes=closes)

    return StructuredOpeningHours(
        entries=tuple(by_day.get(day) or closed_entry(day) for day in WEEKDAYS),
        special=None,
    )


def _decode_special(value: Any) -> SpecialSchedule | None:
    if value == ALWAYS_OPEN:
        return ALWAYS_OPEN
    if value == BY_APPOINTMENT:
        return BY_APPOINTMENT
    return None


def _decode_time(value: Any, pattern: re.Pattern[str]) -> str | None:
    """'9:00' -> '09:00'; anything the builder would not parse -> None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    if _SINGLE_DIGIT_HOUR_RE.match(value):
        value = "0" + value
    if not pattern.fullmatch(value):
        return None
    return value
