from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Weekday = Literal["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
Locale = Literal["de", "en"]
SpecialSchedule = Literal["24/7", "by_appointment"]

WEEKDAYS: tuple[Weekday, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

OSM_DAY_ABBREVIATIONS: dict[str, Weekday] = {
    "Mo": "monday",
    "Tu": "tuesday",
    "We": "wednesday",
    "Th": "thursday",
    "Fr": "friday",
    "Sa": "saturday",
    "Su": "sunday",
}

ALWAYS_OPEN: SpecialSchedule = "24/7"
BY_APPOINTMENT: SpecialSchedule = "by_appointment"


@dataclass(frozen=True)
class OpeningHoursEntry:
    day: Weekday
    opens: str | None
    closes: str | None

    @property
    def is_closed(self) -> bool:
        return self.opens is None


@dataclass(frozen=True)
class StructuredOpeningHours:
    entries: tuple[OpeningHoursEntry, ...]
    special: SpecialSchedule | None = None


@dataclass(frozen=True)
class FormattedHours:
    raw: str
    formatted: str


def closed_entry(day: Weekday) -> OpeningHoursEntry:
    return OpeningHoursEntry(day=day, opens=None, closes=None)
