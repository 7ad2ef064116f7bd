from io import BytesIO
from datetime import datetime
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from class_scheduler.schemas.schedule import Occurrence
from class_scheduler.utils.timeslots import format_time_of_day

COLUMNS = ["Occurrence", "Course", "Day", "Date", "Start", "End", "Professor", "Room", "Grade level"]
MAX_WIDTH = 60


def _cells(o: Occurrence) -> list:
    return [
        o.id,
        o.title,
        o.day.name.title(),
        o.start.date().isoformat(),
        format_time_of_day(o.start),
        format_time_of_day(o.end),
        o.professor,
        o.room,
        o.grade_level,
    ]


def occurrences_to_xlsx_bytes(occurrences: Iterable[Occurrence], sheet_name: str = "Schedule") -> bytes:
    """
    One row per occurrence, ordered by start time, header row frozen.
    """
    table = [_cells(o) for o in sorted(occurrences, key=lambda x: (x.start, x.id))]

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name[:31]
    ws.append(COLUMNS)
    for row in table:
        ws.append(row)

    bold = Font(bold=True)
    for cell in ws[1]:
        cell.font = bold
    ws.freeze_panes = "A2"

    for idx, name in enumerate(COLUMNS):
        width = max([len(name)] + [len(str(row[idx])) for row in table])
        ws.column_dimensions[get_column_letter(idx + 1)].width = min(width + 2, MAX_WIDTH)

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def make_filename(prefix: str = "schedule") -> str:
    return f"{prefix}_{datetime.now():%Y%m%d_%H%M%S}.xlsx"
