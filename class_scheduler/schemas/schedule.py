from datetime import datetime, time
from enum import Enum, IntEnum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from class_scheduler.utils.timeslots import parse_time_of_day, to_local_naive


class Weekday(IntEnum):
    # value = days after Monday
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4


# day-pattern character -> weekday
DAY_CODES = {
    "M": Weekday.MONDAY,
    "T": Weekday.TUESDAY,
    "W": Weekday.WEDNESDAY,
    "R": Weekday.THURSDAY,
    "F": Weekday.FRIDAY,
}


class SectionRow(BaseModel):
    """One row of the section calendar view (section + pattern + time slot)."""

    model_config = ConfigDict(from_attributes=True)

    section_id: int
    pattern_slot_id: int
    time_slot_id: int
    day_code: str = ""
    start_time: time
    end_time: time
    course_code: str
    instructor_name: str = ""
    room_name: str = ""
    grade_level: str = ""

    @field_validator("day_code", "instructor_name", "room_name", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("grade_level", mode="before")
    @classmethod
    def _normalize_grade(cls, v):
        # 9 and "9" must group together
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _parse_time(cls, v):
        if isinstance(v, str):
            return parse_time_of_day(v)
        return v

    @model_validator(mode="after")
    def _check_range(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class Occurrence(BaseModel):
    id: str
    section_id: int
    pattern_slot_id: int
    time_slot_id: int
    day: Weekday
    title: str
    professor: str
    room: str
    grade_level: str
    start: datetime
    end: datetime


class ConflictKind(str, Enum):
    PROFESSOR = "professor"
    ROOM = "room"
    GRADE_LEVEL = "grade_level"


class Conflict(BaseModel):
    kind: ConflictKind
    occurrence_id: str
    message: str


class MoveIn(BaseModel):
    start: datetime
    end: datetime
    all_day: bool = False
    # accept the move even when conflicts are reported
    override: bool = False

    @field_validator("start", "end")
    @classmethod
    def _local_time(cls, v):
        # the schedule is kept in server-local wall time
        return to_local_naive(v)


class MoveOutcome(str, Enum):
    COMMITTED = "committed"
    NOT_FOUND = "not_found"
    DAY_CHANGED = "day_changed"
    INVALID_RANGE = "invalid_range"
    DECLINED = "declined"
    PERSIST_FAILED = "persist_failed"


class MoveResult(BaseModel):
    outcome: MoveOutcome
    # advisory, overridable
    conflicts: List[Conflict] = Field(default_factory=list)
    # fatal, the move was aborted
    notice: Optional[str] = None
    updated: List[Occurrence] = Field(default_factory=list)

    @property
    def committed(self) -> bool:
        return self.outcome == MoveOutcome.COMMITTED


class FacetSelection(BaseModel):
    # empty list = no filter on that facet
    professors: List[str] = Field(default_factory=list)
    rooms: List[str] = Field(default_factory=list)
    grade_levels: List[str] = Field(default_factory=list)


class Facets(BaseModel):
    professors: List[str]
    rooms: List[str]
    grade_levels: List[str]


class ScheduleOut(BaseModel):
    total: int
    occurrences: List[Occurrence]
    facets: Facets
    selection: FacetSelection
