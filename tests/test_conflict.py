from datetime import datetime

from conftest import NOW, make_row
from class_scheduler.schemas.schedule import ConflictKind
from class_scheduler.utils.conflict import find_conflicts
from class_scheduler.utils.occurrences import expand_sections


def _by_id(occurrences):
    return {o.id: o for o in occurrences}


def test_room_conflict_only(rows):
    occ = expand_sections(rows, now=NOW)
    moved = _by_id(occ)["1-M"]

    conflicts = find_conflicts(moved, datetime(2026, 10, 19, 9, 30), datetime(2026, 10, 19, 10, 30), occ)

    assert [c.kind for c in conflicts] == [ConflictKind.ROOM]
    assert conflicts[0].occurrence_id == "2-M"
    assert conflicts[0].message == 'Room conflict: Room 101 is already used by "MA201" at this time.'


def test_moved_occurrence_is_not_compared_with_itself(rows):
    occ = expand_sections(rows, now=NOW)
    moved = _by_id(occ)["1-W"]

    assert find_conflicts(moved, moved.start, moved.end, occ) == []


def test_siblings_on_other_days_do_not_conflict():
    occ = expand_sections([make_row(day_code="MW")], now=NOW)
    moved = _by_id(occ)["1-M"]
    assert find_conflicts(moved, datetime(2026, 10, 19, 8), datetime(2026, 10, 19, 9, 30), occ) == []


def test_multiple_attributes_give_separate_entries():
    occ = expand_sections([
        make_row(section_id=1, day_code="M"),
        make_row(section_id=2, time_slot_id=200, day_code="M", course_code="CS102",
                 start_time="11:00", end_time="12:00"),
    ], now=NOW)
    moved = _by_id(occ)["1-M"]

    conflicts = find_conflicts(moved, datetime(2026, 10, 19, 11, 30), datetime(2026, 10, 19, 12, 30), occ)

    assert [c.kind for c in conflicts] == [
        ConflictKind.PROFESSOR, ConflictKind.ROOM, ConflictKind.GRADE_LEVEL,
    ]
    assert conflicts[0].message == 'Professor conflict: Lee also has "CS102" at this time.'
    assert conflicts[2].message == 'Grade-level conflict: 9 already has "CS102" at this time.'


def test_touching_is_not_a_conflict(rows):
    occ = expand_sections(rows, now=NOW)
    moved = _by_id(occ)["1-M"]

    conflicts = find_conflicts(moved, datetime(2026, 10, 19, 10, 30), datetime(2026, 10, 19, 11, 30), occ)
    assert conflicts == []


def test_overlap_without_shared_attribute():
    occ = expand_sections([
        make_row(section_id=1, day_code="M"),
        make_row(section_id=2, time_slot_id=200, day_code="M", instructor_name="Kim",
                 room_name="Room 9", grade_level=11),
    ], now=NOW)
    moved = _by_id(occ)["1-M"]
    assert find_conflicts(moved, moved.start, moved.end, occ) == []
