from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
import re
from typing import Callable

from openhours_app.core.models import (
    ALWAYS_OPEN,
    BY_APPOINTMENT,
    WEEKDAYS,
    Locale,
    OpeningHoursEntry,
    SpecialSchedule,
    StructuredOpeningHours,
    Weekday,
    closed_entry,
)

Clock = Callable[[], date]

# Indexed by date.weekday(): Monday == 0.
_WEEKDAY_BY_INDEX: dict[int, Weekday] = {
    0: "monday",
    1: "tuesday",
    2: "wednesday",
    3: "thursday",
    4: "friday",
    5: "saturday",
    6: "sunday",
}

DAY_NAMES: dict[Locale, dict[Weekday, str]] = {
    "de": {
        "monday": "Montag",
        "tuesday": "Dienstag",
        "wednesday": "Mittwoch",
        "thursday": "Donnerstag",
        "friday": "Freitag",
        "saturday": "Samstag",
        "sunday": "Sonntag",
    },
    "en": {
        "monday": "Monday",
        "tuesday": "Tuesday",
        "wednesday": "Wednesday",
        "thursday": "Thursday",
        "friday": "Friday",
        "saturday": "Saturday",
        "sunday": "Sunday",
    },
}

_HHMM_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(\+?)\s*$")


def system_clock() -> date:
    return date.today()


def today(clock: Clock) -> Weekday:
    return _WEEKDAY_BY_INDEX[clock().weekday()]


def today_hours(schedule: StructuredOpeningHours, clock: Clock) -> OpeningHoursEntry | None:
    if not schedule.entries:
        return None
    day = today(clock)
    for entry in schedule.entries:
        if entry.day == day:
            return entry
    return None


def format_entry(entry: OpeningHoursEntry | None) -> str:
    if entry is None or entry.is_closed:
        return "Closed"
    return f"{entry.opens}–{entry.closes}"


def week_from_today(schedule: StructuredOpeningHours, clock: Clock) -> tuple[OpeningHoursEntry, ...]:
    start = WEEKDAYS.index(today(clock))
    days = WEEKDAYS[start:] + WEEKDAYS[:start]
    return _entries_for(schedule, days)


def week_from_monday(schedule: StructuredOpeningHours) -> tuple[OpeningHoursEntry, ...]:
    return _entries_for(schedule, WEEKDAYS)


def day_name(day: Weekday, locale: Locale = "de") -> str:
    return DAY_NAMES[locale][day]


def is_special(schedule: StructuredOpeningHours) -> SpecialSchedule | None:
    return schedule.special


def _entries_for(schedule: StructuredOpeningHours, days: tuple[Weekday, ...]) -> tuple[OpeningHoursEntry, ...]:
    by_day: dict[Weekday, OpeningHoursEntry] = {}
    for entry in schedule.entries:
        by_day.setdefault(entry.day, entry)
    return tuple(by_day.get(day) or closed_entry(day) for day in days)


@dataclass(frozen=True)
class OpenStatus:
    is_open: bool | None
    minutes_to_close: int | None
    minutes_to_open: int | None
    note: str


def open_status(schedule: StructuredOpeningHours, now: datetime) -> OpenStatus:
    """Answer "is it open right now".

    ``now`` is local wall-clock time. Today's range is checked, and so is
    yesterday's when it runs past midnight into today.
    ``is_open`` is ``None`` when the answer cannot be derived.
    """
    if schedule.special == ALWAYS_OPEN:
        return OpenStatus(is_open=True, minutes_to_close=None, minutes_to_open=None, note="24/7")
    if schedule.special == BY_APPOINTMENT:
        return OpenStatus(is_open=None, minutes_to_close=None, minutes_to_open=None, note="by appointment")

    day = now.date()
    yesterday = _entries_for(schedule, (WEEKDAYS[day.weekday() - 1],))[0]
    carried = _range_on(yesterday, day - timedelta(days=1))
    if carried is not None and carried[0] <= now < carried[1]:
        return OpenStatus(
            is_open=True,
            minutes_to_close=None if carried[2] else _minutes_between(now, carried[1]),
            minutes_to_open=None,
            note=format_entry(yesterday),
        )

    entry = today_hours(schedule, now.date)
    if entry is None or entry.opens is None or entry.closes is None:
        return OpenStatus(is_open=False, minutes_to_close=None, minutes_to_open=None, note="Closed")

    note = format_entry(entry)
    today_range = _range_on(entry, day)
    if today_range is None:
        return OpenStatus(is_open=None, minutes_to_close=None, minutes_to_open=None, note=note)
    open_dt, close_dt, open_ended = today_range

    if now < open_dt:
        return OpenStatus(
            is_open=False,
            minutes_to_close=None,
            minutes_to_open=_minutes_between(now, open_dt),
            note=note,
        )
    if now < close_dt:
        return OpenStatus(
            is_open=True,
            minutes_to_close=None if open_ended else _minutes_between(now, close_dt),
            minutes_to_open=None,
            note=note,
        )
    if open_ended:
        return OpenStatus(is_open=None, minutes_to_close=None, minutes_to_open=None, note=note)
    return OpenStatus(is_open=False, minutes_to_close=None, minutes_to_open=None, note=note)


def _range_on(entry: OpeningHoursEntry, day: date) -> tuple[datetime, datetime, bool] | None:
    """Open and close datetimes of ``entry`` starting on ``day``, plus the open-ended flag."""
    if entry.opens is None or entry.closes is None:
        return None
    opens = _parse_hhmm(entry.opens)
    closes = _parse_hhmm(entry.closes)
    if opens is None or closes is None:
        return None
    midnight = datetime.combine(day, time(0, 0))
    open_dt = midnight + opens[0]
    close_dt = midnight + closes[0]
    if close_dt <= open_dt:
        close_dt += timedelta(days=1)
    return open_dt, close_dt, closes[1]


def _parse_hhmm(value: str) -> tuple[timedelta, bool] | None:
    """'09:30' -> (9h30m, False); '24:00' -> end of day; '18:00+' -> (18h, True)."""
    m = _HHMM_RE.match(value or "")
    if not m:
        return None
    hh = int(m.group(1))
    mi = int(m.group(2))
    if hh == 24 and mi == 0:
        return timedelta(hours=24), bool(m.group(3))
    if not (0 <= hh <= 23 and 0 <= mi <= 59):
        return None
    return timedelta(hours=hh, minutes=mi), bool(m.group(3))


def _minutes_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)
