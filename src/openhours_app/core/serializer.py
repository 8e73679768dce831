from __future__ import annotations

from openhours_app.core.models import (
    ALWAYS_OPEN,
    BY_APPOINTMENT,
    OSM_DAY_ABBREVIATIONS,
    WEEKDAYS,
    StructuredOpeningHours,
    Weekday,
)
from openhours_app.core.query import week_from_monday

_ABBREVIATION_BY_DAY: dict[Weekday, str] = {day: abbr for abbr, day in OSM_DAY_ABBREVIATIONS.items()}

_Hours = tuple[str, str] | None


def to_osm_hours(schedule: StructuredOpeningHours) -> str:
    """Write a structured week back as an OSM ``opening_hours`` value.

    Used for hours edited as a per-day table, e.g.
    Mo-Fr 09:00-18:00 / Sa 10:00-14:00 / Su closed
    -> "Mo-Fr 09:00-18:00; Sa 10:00-14:00; Su off".
    """
    if schedule.special == ALWAYS_OPEN:
        return "24/7"
    if schedule.special == BY_APPOINTMENT:
        return "by appointment"

    runs = _consecutive_runs(schedule)

    open_groups: dict[tuple[str, str], list[str]] = {}
    closed: list[str] = []
    for start, end, hours in runs:
        label = _run_label(start, end)
        if hours is None:
            closed.append(label)
        else:
            open_groups.setdefault(hours, []).append(label)

    segments = [f"{','.join(labels)} {opens}-{closes}" for (opens, closes), labels in open_groups.items()]
    if closed:
        segments.append(f"{','.join(closed)} off")
    return "; ".join(segments)


def _consecutive_runs(schedule: StructuredOpeningHours) -> list[tuple[int, int, _Hours]]:
    runs: list[tuple[int, int, _Hours]] = []
    for idx, entry in enumerate(week_from_monday(schedule)):
        hours: _Hours = None
        if entry.opens is not None and entry.closes is not None:
            hours = (entry.opens, entry.closes)
        if runs and runs[-1][2] == hours:
            start, _, _ = runs[-1]
            runs[-1] = (start, idx, hours)
        else:
            runs.append((idx, idx, hours))
    return runs


def _run_label(start: int, end: int) -> str:
    first = _ABBREVIATION_BY_DAY[WEEKDAYS[start]]
    last = _ABBREVIATION_BY_DAY[WEEKDAYS[end]]
    if start == end:
        return first
    if end == start + 1:
        return f"{first},{last}"
    return f"{first}-{last}"
