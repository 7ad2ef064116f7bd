from datetime import datetime

from conftest import NOW, make_row
from class_scheduler.schemas.schedule import Weekday
from class_scheduler.utils.occurrences import expand_sections


def test_one_occurrence_per_day_code():
    occ = expand_sections([make_row(day_code="MWF")], now=NOW)

    assert [o.id for o in occ] == ["1-M", "1-W", "1-F"]
    assert [o.day for o in occ] == [Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY]
    assert {o.time_slot_id for o in occ} == {100}
    assert occ[0].start == datetime(2026, 10, 19, 9, 0)
    assert occ[0].end == datetime(2026, 10, 19, 10, 0)
    assert occ[2].start == datetime(2026, 10, 23, 9, 0)


def test_start_and_end_on_same_day():
    for o in expand_sections([make_row(day_code="MTWRF")], now=NOW):
        assert o.start.date() == o.end.date()
        assert o.start.weekday() == int(o.day)


def test_display_fields():
    o = expand_sections([make_row(day_code="R")], now=NOW)[0]

    assert o.title == "CS101"
    assert o.professor == "Lee"
    assert o.room == "Room 101"
    assert o.grade_level == "9"
    assert o.section_id == 1 and o.pattern_slot_id == 10


def test_empty_day_code_defaults_to_monday():
    occ = expand_sections([make_row(day_code="")], now=NOW)
    assert [o.id for o in occ] == ["1-M"]


def test_unknown_codes_are_skipped():
    occ = expand_sections([make_row(day_code="MXS")], now=NOW)
    assert [o.id for o in occ] == ["1-M"]


def test_repeated_code_yields_one_occurrence():
    occ = expand_sections([make_row(day_code="MM")], now=NOW)
    assert [o.id for o in occ] == ["1-M"]


def test_missing_seconds_default_to_zero():
    o = expand_sections([make_row(start_time="08:15", end_time="09:45:30")], now=NOW)[0]
    assert o.start.second == 0
    assert o.end.second == 30


def test_empty_input():
    assert expand_sections([], now=NOW) == []


def test_deterministic(rows):
    first = expand_sections(rows, now=NOW)
    second = expand_sections(rows, now=NOW)
    assert [o.model_dump() for o in first] == [o.model_dump() for o in second]
