from openhours_app.core.builder import build_structured_hours, parse_day_tokens
from openhours_app.core.models import WEEKDAYS, OpeningHoursEntry, StructuredOpeningHours


def _by_day(schedule: StructuredOpeningHours) -> dict[str, OpeningHoursEntry]:
    return {e.day: e for e in schedule.entries}


def test_parse_day_tokens() -> None:
    assert parse_day_tokens("Mo-Fr") == ["monday", "tuesday", "wednesday", "thursday", "friday"]
    assert parse_day_tokens("Mo,We,Fr") == ["monday", "wednesday", "friday"]
    assert parse_day_tokens("Sa,Su,PH") == ["saturday", "sunday"]
    assert parse_day_tokens("Mo-We,Fr") == ["monday", "tuesday", "wednesday", "friday"]
    assert parse_day_tokens("Mo,Mo-Tu") == ["monday", "tuesday"]


def test_parse_day_tokens_ignores_reversed_and_unknown() -> None:
    assert parse_day_tokens("Fr-Mo") == []
    assert parse_day_tokens("PH") == []
    assert parse_day_tokens("Xx,Mo-Zz") == []


def test_build_special_schedules() -> None:
    assert build_structured_hours("24/7") == StructuredOpeningHours(entries=(), special="24/7")
    assert build_structured_hours("  24/7 ") == StructuredOpeningHours(entries=(), special="24/7")
    assert build_structured_hours("by appointment") == StructuredOpeningHours(entries=(), special="by_appointment")
    assert build_structured_hours("By Appointment").special == "by_appointment"


def test_build_closed_day_extraction() -> None:
    schedule = build_structured_hours("Mo-Fr 09:00-18:00; Sa,Su off")
    days = _by_day(schedule)
    assert schedule.special is None
    assert days["saturday"].opens is None
    assert days["saturday"].closes is None
    assert days["sunday"].opens is None
    assert days["monday"] == OpeningHoursEntry(day="monday", opens="09:00", closes="18:00")
    assert days["friday"].closes == "18:00"


def test_build_always_seven_entries_monday_first() -> None:
    for osm in ["", "Sa 10:00-14:00; Mo 09:00-12:00", "garbage", "PH off", "Mo-Fr 9-5"]:
        schedule = build_structured_hours(osm)
        assert schedule.special is None
        assert tuple(e.day for e in schedule.entries) == WEEKDAYS
        for entry in schedule.entries:
            assert (entry.opens is None) == (entry.closes is None)


def test_build_later_segment_overrides_earlier() -> None:
    schedule = build_structured_hours("Mo-Sa 09:00-18:00; Sa 10:00-14:00; We off")
    days = _by_day(schedule)
    assert days["monday"].opens == "09:00"
    assert days["saturday"].opens == "10:00"
    assert days["saturday"].closes == "14:00"
    assert days["wednesday"].opens is None
    assert days["sunday"].opens is None


def test_build_keeps_first_range_only() -> None:
    days = _by_day(build_structured_hours("Mo-Fr 08:00-12:00,14:00-18:00"))
    assert days["tuesday"].opens == "08:00"
    assert days["tuesday"].closes == "12:00"


def test_build_keeps_open_ended_close_suffix() -> None:
    days = _by_day(build_structured_hours("Fr,Sa 18:00-02:00+"))
    assert days["friday"].closes == "02:00+"


def test_build_skips_malformed_segments() -> None:
    schedule = build_structured_hours("Mo 09:00-12:00; Tu nonsense; We; Th 10:00+")
    days = _by_day(schedule)
    assert days["monday"].opens == "09:00"
    assert days["tuesday"].opens is None
    assert days["wednesday"].opens is None
    assert days["thursday"].opens is None


def test_build_end_to_end() -> None:
    schedule = build_structured_hours("Mo,We,Fr 09:00-18:00; Tu,Th 10:00-20:00; Sa 10:00-14:00; Su off")
    days = _by_day(schedule)
    assert days["tuesday"].opens == "10:00"
    assert days["wednesday"].closes == "18:00"
    assert days["sunday"].opens is None


def test_build_off_keyword_ignores_case() -> None:
    days = _by_day(build_structured_hours("Mo-Su 09:00-18:00; Su Off; Sa OFF"))
    assert days["friday"].opens == "09:00"
    assert days["saturday"].opens is None
    assert days["sunday"].opens is None
    assert days["sunday"].closes is None
