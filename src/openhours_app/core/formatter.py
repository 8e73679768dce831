from __future__ import annotations

import re

from openhours_app.core.models import FormattedHours

_PUBLIC_HOLIDAY_RE = re.compile(r"\bPH\b")
_LEADING_ZERO_RE = re.compile(r"\b0(\d):(\d{2})")


def format_osm_hours(osm: str) -> FormattedHours:
    """Render an OSM ``opening_hours`` value as display text.

    "Mo-Fr 09:00-18:00; Sa 10:00-14:00" -> "Mo-Fr: 9:00-18:00, Sa: 10:00-14:00"

    Segments that do not look like ``<days> <times>`` or ``<days> off`` are
    echoed unchanged.
    """
    if not osm or not osm.strip():
        return FormattedHours(raw=osm, formatted="")

    if osm.strip() == "24/7":
        return FormattedHours(raw=osm, formatted="24/7")

    segments = [s.strip() for s in osm.split(";")]
    formatted = ", ".join(_format_segment(s) for s in segments)
    return FormattedHours(raw=osm, formatted=formatted)


def _format_segment(segment: str) -> str:
    if " off" in segment:
        days = segment.replace(" off", "").strip()
        return f"{_format_days(days)}: Geschlossen"

    parts = segment.split(" ")
    if len(parts) < 2:
        return segment

    days = parts[0]
    hours = " ".join(parts[1:])
    if ":" not in hours:
        return segment

    return f"{_format_days(days)}: {_format_times(hours)}"


def _format_days(days: str) -> str:
    return _PUBLIC_HOLIDAY_RE.sub("Feiertage", days)


def _format_times(hours: str) -> str:
    # "08:00-12:00,14:00-18:00" -> "8:00-12:00, 14:00-18:00"
    ranges = [_LEADING_ZERO_RE.sub(r"\1:\2", r.strip()) for r in hours.split(",")]
    return ", ".join(ranges)
