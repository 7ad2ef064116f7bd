from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import StreamingResponse

from class_scheduler.schemas.schedule import (
    FacetSelection, Facets, MoveIn, MoveOutcome, MoveResult, ScheduleOut,
)
from class_scheduler.utils.excel_export import make_filename, occurrences_to_xlsx_bytes
from class_scheduler.utils.filters import facet_values
from class_scheduler.utils.reschedule import ScheduleCoordinator

import logging
logger = logging.getLogger("class_scheduler.schedule")


router = APIRouter(prefix="/schedule", tags=["Schedule"])

# outcome -> HTTP status for moves that did not commit
_MOVE_STATUS = {
    MoveOutcome.NOT_FOUND: 404,
    MoveOutcome.DAY_CHANGED: 400,
    MoveOutcome.INVALID_RANGE: 400,
    MoveOutcome.DECLINED: 409,
    MoveOutcome.PERSIST_FAILED: 502,
}


def get_schedule(request: Request) -> ScheduleCoordinator:
    return request.app.state.schedule


def get_selection(
    professor: Optional[List[str]] = Query(None, description="multi-select, empty = all"),
    room: Optional[List[str]] = Query(None, description="multi-select, empty = all"),
    grade_level: Optional[List[str]] = Query(None, description="multi-select, empty = all"),
) -> FacetSelection:
    return FacetSelection(
        professors=professor or [],
        rooms=room or [],
        grade_levels=grade_level or [],
    )


@router.get("/occurrences", response_model=ScheduleOut)
def list_occurrences(
    selection: FacetSelection = Depends(get_selection),
    schedule: ScheduleCoordinator = Depends(get_schedule),
):
    return schedule.view(selection)


@router.get("/facets", response_model=Facets)
def list_facets(schedule: ScheduleCoordinator = Depends(get_schedule)):
    return facet_values(schedule.occurrences)


@router.post("/reload")
async def reload_schedule(schedule: ScheduleCoordinator = Depends(get_schedule)):
    count = await schedule.load()
    if count is None:
        raise HTTPException(
            status_code=502,
            detail={"message": "Could not read the schedule from the database; the previous schedule is kept."},
        )
    return {"message": "Schedule reloaded", "occurrences": count}


@router.post("/occurrences/{occurrence_id}/move", response_model=MoveResult)
async def move_occurrence(
    occurrence_id: str,
    body: MoveIn,
    schedule: ScheduleCoordinator = Depends(get_schedule),
):
    # the client confirms by re-sending with override=true
    result = await schedule.move(
        occurrence_id,
        body.start,
        body.end,
        confirm=lambda conflicts: body.override,
        all_day=body.all_day,
    )
    if result.committed:
        return result

    if result.outcome == MoveOutcome.DECLINED:
        message = "Time conflict"
    else:
        message = result.notice
    raise HTTPException(
        status_code=_MOVE_STATUS[result.outcome],
        detail={
            "message": message,
            "outcome": result.outcome.value,
            "conflicts": [c.message for c in result.conflicts],
        },
    )


@router.get("/export")
def export_schedule(
    selection: FacetSelection = Depends(get_selection),
    schedule: ScheduleCoordinator = Depends(get_schedule),
):
    """
    Export the filtered occurrences as Excel (.xlsx)
    """
    occurrences = schedule.view(selection).occurrences
    logger.info("Exporting %d occurrences", len(occurrences))
    xlsx_bytes = occurrences_to_xlsx_bytes(occurrences)
    filename = make_filename("schedule")

    return StreamingResponse(
        iter([xlsx_bytes]),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
