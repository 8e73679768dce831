from openhours_app.core.builder import build_structured_hours
from openhours_app.core.codec import decode_structured_hours
from openhours_app.core.serializer import to_osm_hours


def test_to_osm_groups_consecutive_days() -> None:
    schedule = build_structured_hours("Mo-Fr 09:00-18:00; Sa 10:00-14:00; Su off")
    assert to_osm_hours(schedule) == "Mo-Fr 09:00-18:00; Sa 10:00-14:00; Su off"


def test_to_osm_joins_non_adjacent_days_with_same_hours() -> None:
    schedule = build_structured_hours("Mo,We,Fr 09:00-18:00; Tu,Th 10:00-20:00; Sa 10:00-14:00; Su off")
    assert to_osm_hours(schedule) == "Mo,We,Fr 09:00-18:00; Tu,Th 10:00-20:00; Sa 10:00-14:00; Su off"


def test_to_osm_two_day_runs_and_scattered_closed_days() -> None:
    schedule = build_structured_hours("Tu,We 10:00-18:00; Fr-Sa 10:00-14:00")
    assert to_osm_hours(schedule) == "Tu,We 10:00-18:00; Fr,Sa 10:00-14:00; Mo,Th,Su off"


def test_to_osm_special_and_all_closed() -> None:
    assert to_osm_hours(build_structured_hours("24/7")) == "24/7"
    assert to_osm_hours(build_structured_hours("by appointment")) == "by appointment"
    assert to_osm_hours(build_structured_hours("")) == "Mo-Su off"


def test_to_osm_rebuilds_to_the_same_schedule() -> None:
    sources = [
        "Mo-Fr 09:00-18:00; Sa,Su off",
        "Mo 08:00-12:00; We 08:00-12:00; Sa 10:00-02:00+",
        "Su 10:00-16:00",
        "24/7",
        "by appointment",
    ]
    for osm in sources:
        schedule = build_structured_hours(osm)
        assert build_structured_hours(to_osm_hours(schedule)) == schedule


def test_to_osm_accepts_user_submitted_hours() -> None:
    suggestion = decode_structured_hours(
        {
            "entries": [
                {"day": "monday", "opens": "09:00", "closes": "17:00"},
                {"day": "tuesday", "opens": "09:00", "closes": "17:00"},
                {"day": "wednesday", "opens": "09:00", "closes": "17:00"},
            ]
        }
    )
    assert suggestion is not None
    assert to_osm_hours(suggestion) == "Mo-We 09:00-17:00; Th-Su off"


def test_to_osm_of_decoded_suggestion_rebuilds_to_it() -> None:
    suggestion = decode_structured_hours(
        {"entries": [{"day": "monday", "opens": "9:00", "closes": "17:00"}]}
    )
    assert suggestion is not None
    osm = to_osm_hours(suggestion)
    assert osm == "Mo 09:00-17:00; Tu-Su off"
    assert build_structured_hours(osm) == suggestion


def test_to_osm_cannot_gain_segments_from_stored_times() -> None:
    suggestion = decode_structured_hours(
        {"entries": [{"day": "monday", "opens": "abc", "closes": "x; Su 10:00-12:00"}]}
    )
    assert suggestion is not None
    assert to_osm_hours(suggestion) == "Mo-Su off"
    assert build_structured_hours(to_osm_hours(suggestion)).entries[6].opens is None
