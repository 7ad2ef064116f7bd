import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from class_scheduler.config import settings
from class_scheduler.schemas.schedule import DAY_CODES, Occurrence, SectionRow
from class_scheduler.utils.timeslots import week_anchor

logger = logging.getLogger("class_scheduler.occurrences")


def expand_sections(rows: Iterable[SectionRow], now: Optional[datetime] = None) -> List[Occurrence]:
    """
    Turn section rows into concrete occurrences of the current week.

    A row with day_code "MW" becomes two occurrences, "<section_id>-M" on
    Monday and "<section_id>-W" on Wednesday, both carrying the row's
    time_slot_id. Unknown day characters are skipped.
    """
    monday = week_anchor(now or datetime.now())
    out = []

    for row in rows:
        codes = row.day_code or settings.DEFAULT_DAY_CODE
        seen = set()

        for code in codes:
            weekday = DAY_CODES.get(code)
            if weekday is None:
                logger.debug("section %s: skipping unknown day code %r", row.section_id, code)
                continue
            # "MM" still means one meeting on Monday
            if code in seen:
                continue
            seen.add(code)

            day = (monday + timedelta(days=int(weekday))).date()
            out.append(
                Occurrence(
                    id=f"{row.section_id}-{code}",
                    section_id=row.section_id,
                    pattern_slot_id=row.pattern_slot_id,
                    time_slot_id=row.time_slot_id,
                    day=weekday,
                    title=row.course_code,
                    professor=row.instructor_name,
                    room=row.room_name,
                    grade_level=row.grade_level,
                    start=datetime.combine(day, row.start_time),
                    end=datetime.combine(day, row.end_time),
                )
            )

    return out
