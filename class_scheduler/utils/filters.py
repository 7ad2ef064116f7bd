from typing import Iterable, List, Optional

from class_scheduler.schemas.schedule import FacetSelection, Facets, Occurrence


def facet_values(occurrences: Iterable[Occurrence]) -> Facets:
    occurrences = list(occurrences)
    return Facets(
        professors=sorted({o.professor for o in occurrences}),
        rooms=sorted({o.room for o in occurrences}),
        grade_levels=sorted({o.grade_level for o in occurrences}),
    )


def apply_filters(occurrences: Iterable[Occurrence], selection: FacetSelection) -> List[Occurrence]:
    # facets combine with AND, values within a facet with OR
    professors = set(selection.professors)
    rooms = set(selection.rooms)
    grades = set(selection.grade_levels)

    out = []
    for o in occurrences:
        if professors and o.professor not in professors:
            continue
        if rooms and o.room not in rooms:
            continue
        if grades and o.grade_level not in grades:
            continue
        out.append(o)
    return out


def toggle_value(selected: List[str], value: Optional[str]) -> List[str]:
    """
    Checkbox semantics for one facet. value=None is the "All" box and
    clears the selection; any other value is added if absent, removed if present.
    """
    if value is None:
        return []
    if value in selected:
        return [v for v in selected if v != value]
    return [*selected, value]
