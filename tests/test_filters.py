import random

from conftest import NOW
from class_scheduler.schemas.schedule import FacetSelection
from class_scheduler.utils.filters import apply_filters, facet_values, toggle_value
from class_scheduler.utils.occurrences import expand_sections


def test_facet_values_are_distinct_and_sorted(rows):
    facets = facet_values(expand_sections(rows, now=NOW))

    assert facets.professors == ["Kim", "Lee"]
    assert facets.rooms == ["Room 101", "Room 202"]
    assert facets.grade_levels == ["10", "9"]


def test_empty_selection_shows_all(rows):
    occ = expand_sections(rows, now=NOW)
    assert apply_filters(occ, FacetSelection()) == occ


def test_professor_filter_independent_of_order(rows):
    occ = expand_sections(rows, now=NOW)
    expected = {o.id for o in occ if o.professor == "Lee"}

    shuffled = list(occ)
    random.Random(7).shuffle(shuffled)

    got = apply_filters(shuffled, FacetSelection(professors=["Lee"]))
    assert {o.id for o in got} == expected == {"1-M", "1-W", "3-T", "3-R"}


def test_facets_combine_with_and(rows):
    occ = expand_sections(rows, now=NOW)
    sel = FacetSelection(professors=["Lee", "Kim"], rooms=["Room 101"], grade_levels=["9"])

    assert {o.id for o in apply_filters(occ, sel)} == {"1-M", "1-W"}


def test_no_match_is_empty(rows):
    occ = expand_sections(rows, now=NOW)
    assert apply_filters(occ, FacetSelection(rooms=["Gym"])) == []


def test_toggle_value():
    assert toggle_value([], "Lee") == ["Lee"]
    assert toggle_value(["Lee"], "Kim") == ["Lee", "Kim"]
    assert toggle_value(["Lee", "Kim"], "Lee") == ["Kim"]
    assert toggle_value(["Lee", "Kim"], None) == []
