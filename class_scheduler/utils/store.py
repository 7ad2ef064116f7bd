import logging
from typing import Callable, List, Protocol

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from class_scheduler.models.pattern_slot import PatternSlot
from class_scheduler.models.section import Section
from class_scheduler.models.time_slot import TimeSlot
from class_scheduler.schemas.schedule import SectionRow
from class_scheduler.utils.timeslots import parse_time_of_day

logger = logging.getLogger("class_scheduler.store")


class ScheduleStoreError(RuntimeError):
    """Raised when the backing store cannot be read or written."""


class ScheduleStore(Protocol):
    async def fetch_rows(self) -> List[SectionRow]:
        ...

    async def update_time_slot(self, time_slot_id: int, start_time: str, end_time: str) -> None:
        ...


def rows_from_records(records) -> List[SectionRow]:
    """
    Validate raw records (mappings or ORM rows) into SectionRow.
    Invalid records are logged and skipped so one bad row cannot empty the schedule.
    """
    out = []
    for rec in records:
        try:
            if isinstance(rec, dict):
                out.append(SectionRow.model_validate(rec))
            else:
                out.append(SectionRow.model_validate(dict(rec._mapping)))
        except ValidationError as e:
            logger.warning("Skipping invalid section row %r: %s", rec, e)
    return out


class SqlScheduleStore:
    """ScheduleStore over SQLAlchemy sessions; blocking work runs in the threadpool."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def _fetch_rows(self) -> List[SectionRow]:
        db = self._session_factory()
        try:
            records = (
                db.query(
                    Section.section_id,
                    Section.pattern_slot_id,
                    PatternSlot.time_slot_id,
                    PatternSlot.day_code,
                    TimeSlot.start_time,
                    TimeSlot.end_time,
                    Section.course_code,
                    Section.instructor_name,
                    Section.room_name,
                    Section.grade_level,
                )
                .join(PatternSlot, PatternSlot.pattern_slot_id == Section.pattern_slot_id)
                .join(TimeSlot, TimeSlot.time_slot_id == PatternSlot.time_slot_id)
                .order_by(Section.section_id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            raise ScheduleStoreError(f"could not read sections: {e}") from e
        finally:
            db.close()
        return rows_from_records(records)

    def _update_time_slot(self, time_slot_id: int, start_time: str, end_time: str) -> None:
        db = self._session_factory()
        try:
            updated = (
                db.query(TimeSlot)
                .filter(TimeSlot.time_slot_id == time_slot_id)
                .update(
                    {
                        TimeSlot.start_time: parse_time_of_day(start_time),
                        TimeSlot.end_time: parse_time_of_day(end_time),
                    },
                    synchronize_session=False,
                )
            )
            if updated == 0:
                db.rollback()
                raise ScheduleStoreError(f"time slot {time_slot_id} not found")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise ScheduleStoreError(f"could not update time slot {time_slot_id}: {e}") from e
        finally:
            db.close()

    async def fetch_rows(self) -> List[SectionRow]:
        return await run_in_threadpool(self._fetch_rows)

    async def update_time_slot(self, time_slot_id: int, start_time: str, end_time: str) -> None:
        await run_in_threadpool(self._update_time_slot, time_slot_id, start_time, end_time)
