import os

# keep the test run off PostgreSQL
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime

import pytest

from class_scheduler.schemas.schedule import SectionRow
from class_scheduler.utils.store import ScheduleStoreError

# Wednesday; its week starts Monday 2026-10-19
NOW = datetime(2026, 10, 21, 12, 0)


class FakeStore:
    def __init__(self, rows, fail_read=False, fail_write=False):
        self.rows = rows
        self.fail_read = fail_read
        self.fail_write = fail_write
        self.updates = []

    async def fetch_rows(self):
        if self.fail_read:
            raise ScheduleStoreError("read failed")
        return list(self.rows)

    async def update_time_slot(self, time_slot_id, start_time, end_time):
        if self.fail_write:
            raise ScheduleStoreError("write failed")
        self.updates.append((time_slot_id, start_time, end_time))


def make_row(**kw):
    data = {
        "section_id": 1,
        "pattern_slot_id": 10,
        "time_slot_id": 100,
        "day_code": "MW",
        "start_time": "09:00:00",
        "end_time": "10:00:00",
        "course_code": "CS101",
        "instructor_name": "Lee",
        "room_name": "Room 101",
        "grade_level": 9,
    }
    data.update(kw)
    return SectionRow.model_validate(data)


@pytest.fixture
def rows():
    return [
        make_row(),
        make_row(
            section_id=2, pattern_slot_id=20, time_slot_id=200, day_code="M",
            start_time="09:30", end_time="10:30", course_code="MA201",
            instructor_name="Kim", grade_level="10",
        ),
        make_row(
            section_id=3, pattern_slot_id=30, time_slot_id=300, day_code="TR",
            start_time="13:00", end_time="14:00", course_code="EN110",
            room_name="Room 202",
        ),
    ]


@pytest.fixture
def store(rows):
    return FakeStore(rows)
