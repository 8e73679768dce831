from __future__ import annotations

import logging
import re

from openhours_app.core.models import (
    ALWAYS_OPEN,
    BY_APPOINTMENT,
    OSM_DAY_ABBREVIATIONS,
    WEEKDAYS,
    OpeningHoursEntry,
    StructuredOpeningHours,
    Weekday,
    closed_entry,
)

_log = logging.getLogger(__name__)

_DAY_ORDER = list(OSM_DAY_ABBREVIATIONS)
OPENS_PATTERN = r"\d{2}:\d{2}"
CLOSES_PATTERN = r"\d{2}:\d{2}\+?"

_TIME_RANGE_RE = re.compile(rf"({OPENS_PATTERN})-({CLOSES_PATTERN})")


def parse_day_tokens(days: str) -> list[Weekday]:
    """Expand the day part of a segment ("Mo-Fr", "Mo,We,Fr", "Sa,Su,PH").

    Ranges walk forward Monday -> Sunday and do not wrap. ``PH`` and anything
    that is not a two-letter day abbreviation is ignored.
    """
    out: list[Weekday] = []
    for token in days.split(","):
        token = token.strip()
        if not token:
            continue
        if "-" in token:
            start, _, end = token.partition("-")
            start = start.strip()
            end = end.strip()
            if start not in OSM_DAY_ABBREVIATIONS or end not in OSM_DAY_ABBREVIATIONS:
                continue
            start_idx = _DAY_ORDER.index(start)
            end_idx = _DAY_ORDER.index(end)
            for abbr in _DAY_ORDER[start_idx : end_idx + 1]:
                day = OSM_DAY_ABBREVIATIONS[abbr]
                if day not in out:
                    out.append(day)
            continue
        day = OSM_DAY_ABBREVIATIONS.get(token)
        if day is not None and day not in out:
            out.append(day)
    return out


def build_structured_hours(osm: str) -> StructuredOpeningHours:
    """Convert an OSM ``opening_hours`` value into a fixed Monday-first week.

    Segments are applied left to right; a later segment overwrites the days an
    earlier one set. Only the first time range of a segment is kept, so split
    hours ("08:00-12:00,14:00-18:00") become "08:00"-"12:00".
    """
    trimmed = (osm or "").strip()
    if trimmed == "24/7":
        return StructuredOpeningHours(entries=(), special=ALWAYS_OPEN)
    if trimmed.lower() == "by appointment":
        return StructuredOpeningHours(entries=(), special=BY_APPOINTMENT)

    week: dict[Weekday, OpeningHoursEntry] = {day: closed_entry(day) for day in WEEKDAYS}

    for segment in trimmed.split(";"):
        segment = segment.strip()
        if not segment:
            continue
        parsed = _parse_segment(segment)
        if parsed is None:
            _log.debug("Skipping unparseable opening_hours segment: %r", segment)
            continue
        days, opens, closes = parsed
        for day in days:
            week[day] = OpeningHoursEntry(day=day, opens=opens, closes=closes)

    return StructuredOpeningHours(entries=tuple(week[day] for day in WEEKDAYS), special=None)


def _parse_segment(segment: str) -> tuple[list[Weekday], str | None, str | None] | None:
    parts = segment.split()
    if len(parts) < 2:
        return None

    days = parse_day_tokens(parts[0])
    rest = " ".join(parts[1:])

    if rest.lower() == "off":
        return days, None, None

    m = _TIME_RANGE_RE.search(rest)
    if not m:
        return None
    return days, m.group(1), m.group(2)
