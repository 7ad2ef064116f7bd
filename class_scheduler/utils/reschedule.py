import asyncio
import inspect
import logging
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, Union

from class_scheduler.schemas.schedule import (
    Conflict, FacetSelection, MoveOutcome, MoveResult, Occurrence, ScheduleOut,
)
from class_scheduler.utils.conflict import find_conflicts
from class_scheduler.utils.filters import apply_filters, facet_values
from class_scheduler.utils.occurrences import expand_sections
from class_scheduler.utils.store import ScheduleStore
from class_scheduler.utils.timeslots import format_time_of_day, to_local_naive

logger = logging.getLogger("class_scheduler.reschedule")

# receives the conflicts of a pending move, returns True to move anyway
ConfirmHandler = Callable[[List[Conflict]], Union[bool, Awaitable[bool]]]

DAY_CHANGED_NOTICE = "For now you can only change the time, not the day of the week."
INVALID_RANGE_NOTICE = "A class must start and end on the same day, and end after it starts."
NOT_FOUND_NOTICE = "This class is no longer on the schedule. Reload and try again."
PERSIST_FAILED_NOTICE = (
    "There was a problem saving this change in the database, so the calendar was not updated."
)


class ScheduleCoordinator:
    """
    Owns the in-memory occurrence set and is its only writer.

    A move runs validate -> detect -> confirm -> commit. The occurrence set is
    touched only after the store write succeeded, and then for every
    occurrence sharing the moved one's time slot.
    """

    def __init__(self, store: ScheduleStore, clock: Optional[Callable[[], datetime]] = None):
        self._store = store
        self._clock = clock or datetime.now
        self._occurrences: List[Occurrence] = []
        self._move_lock = asyncio.Lock()

    @property
    def occurrences(self) -> List[Occurrence]:
        return list(self._occurrences)

    def get(self, occurrence_id: str) -> Optional[Occurrence]:
        for o in self._occurrences:
            if o.id == occurrence_id:
                return o
        return None

    async def load(self) -> Optional[int]:
        """
        Rebuild the occurrence set from the store and return its size.
        On failure the current set is kept (empty before the first load) and None is returned.
        """
        try:
            rows = await self._store.fetch_rows()
        except Exception:
            logger.exception("Failed to load sections from the store")
            return None

        self._occurrences = expand_sections(rows, now=self._clock())
        logger.info("Loaded %d sections as %d occurrences", len(rows), len(self._occurrences))
        return len(self._occurrences)

    def view(self, selection: Optional[FacetSelection] = None) -> ScheduleOut:
        selection = selection or FacetSelection()
        shown = apply_filters(self._occurrences, selection)
        return ScheduleOut(
            total=len(shown),
            occurrences=shown,
            facets=facet_values(self._occurrences),
            selection=selection,
        )

    async def move(
        self,
        occurrence_id: str,
        start: datetime,
        end: datetime,
        confirm: ConfirmHandler,
        all_day: bool = False,
    ) -> MoveResult:
        # all_day only matters to the calendar widget
        async with self._move_lock:
            return await self._move(occurrence_id, start, end, confirm)

    async def _move(self, occurrence_id, start, end, confirm) -> MoveResult:
        event = self.get(occurrence_id)
        if event is None:
            logger.info("Move rejected: occurrence %s not found", occurrence_id)
            return MoveResult(outcome=MoveOutcome.NOT_FOUND, notice=NOT_FOUND_NOTICE)

        start = to_local_naive(start)
        end = to_local_naive(end)

        # 1) validate
        if event.start.weekday() != start.weekday():
            logger.info(
                "Move rejected: %s would change day %s -> %s",
                event.id, event.start.strftime("%A"), start.strftime("%A"),
            )
            return MoveResult(outcome=MoveOutcome.DAY_CHANGED, notice=DAY_CHANGED_NOTICE)
        if end <= start or end.date() != start.date():
            logger.info("Move rejected: %s invalid range %s - %s", event.id, start, end)
            return MoveResult(outcome=MoveOutcome.INVALID_RANGE, notice=INVALID_RANGE_NOTICE)

        # the drop may land in another week; only the time of day is kept
        new_start = datetime.combine(event.start.date(), start.time())
        new_end = datetime.combine(event.start.date(), end.time())

        # 2) detect, against the full set
        conflicts = find_conflicts(event, new_start, new_end, self._occurrences)

        # 3) confirm
        if conflicts:
            try:
                decision = confirm(conflicts)
                if inspect.isawaitable(decision):
                    decision = await decision
            except Exception:
                logger.exception("Confirmation for %s failed, treating as declined", event.id)
                decision = False
            if not decision:
                logger.info("Move of %s declined with %d conflicts", event.id, len(conflicts))
                return MoveResult(outcome=MoveOutcome.DECLINED, conflicts=conflicts)
            logger.info("Move of %s overrides %d conflicts", event.id, len(conflicts))

        # 4) commit
        start_str = format_time_of_day(new_start)
        end_str = format_time_of_day(new_end)
        try:
            await self._store.update_time_slot(event.time_slot_id, start_str, end_str)
        except Exception:
            logger.exception("Failed to save time slot %s for %s", event.time_slot_id, event.id)
            return MoveResult(
                outcome=MoveOutcome.PERSIST_FAILED,
                conflicts=conflicts,
                notice=PERSIST_FAILED_NOTICE,
            )

        # occurrences are never mutated; the list is swapped in one assignment
        occurrences = []
        updated = []
        for o in self._occurrences:
            if o.time_slot_id == event.time_slot_id:
                o = o.model_copy(update={
                    "start": datetime.combine(o.start.date(), new_start.time()),
                    "end": datetime.combine(o.end.date(), new_end.time()),
                })
                updated.append(o)
            occurrences.append(o)
        self._occurrences = occurrences

        logger.info(
            "Moved time slot %s to %s-%s (%d occurrences)",
            event.time_slot_id, start_str, end_str, len(updated),
        )
        return MoveResult(outcome=MoveOutcome.COMMITTED, conflicts=conflicts, updated=updated)
