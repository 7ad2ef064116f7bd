# class_scheduler/utils/conflict.py
from datetime import datetime
from typing import Iterable, List

from class_scheduler.schemas.schedule import Conflict, ConflictKind, Occurrence
from class_scheduler.utils.timeslots import overlaps


def find_conflicts(
    moved: Occurrence,
    start: datetime,
    end: datetime,
    occurrences: Iterable[Occurrence],
) -> List[Conflict]:
    """
    moved: the occurrence being dragged (its own start/end are ignored)
    start, end: the proposed new time
    occurrences: every loaded occurrence, not just the displayed ones

    One entry per (other occurrence x shared attribute), in input order and
    professor -> room -> grade level within an occurrence. An occurrence
    clashing on several attributes yields several entries.
    """
    out = []
    for other in occurrences:
        if other.id == moved.id:
            continue
        if not overlaps(start, end, other.start, other.end):
            continue

        if moved.professor == other.professor:
            out.append(Conflict(
                kind=ConflictKind.PROFESSOR,
                occurrence_id=other.id,
                message=f'Professor conflict: {moved.professor} also has "{other.title}" at this time.',
            ))
        if moved.room == other.room:
            out.append(Conflict(
                kind=ConflictKind.ROOM,
                occurrence_id=other.id,
                message=f'Room conflict: {moved.room} is already used by "{other.title}" at this time.',
            ))
        if moved.grade_level == other.grade_level:
            out.append(Conflict(
                kind=ConflictKind.GRADE_LEVEL,
                occurrence_id=other.id,
                message=f'Grade-level conflict: {moved.grade_level} already has "{other.title}" at this time.',
            ))
    return out
