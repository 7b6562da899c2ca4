from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Mapping, Optional

from ..common.datetime_utils import LocalOffset, local_day_window, local_offset_for_date, local_to_instant, parse_hhmm
from ..core.enums import PRIVILEGED_ROLES, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..entries.model import TimeEntry
from ..entries.repository import TimeEntryRepository
from ..events.repository import EventRepository
from ..workers.service import WorkerDirectory
from .locks import KeyedLocks
from .model import MEAL_PAIRS, SPAN_FIELDS, Checkpoint, ShiftEditResult

logger = logging.getLogger(__name__)


def build_checkpoints(event_date: date, spans: Mapping[str, Optional[str]], *, offset: LocalOffset) -> list[Checkpoint]:
    """Turn local "HH:mm" spans into ordered, overnight-corrected, validated instants."""
    walls = {f.name: parse_hhmm(spans.get(f.name), f.label) for f in SPAN_FIELDS}

    for n, start_name, end_name in MEAL_PAIRS:
        has_start = walls[start_name] is not None
        has_end = walls[end_name] is not None
        if has_start != has_end:
            missing = end_name if has_start else start_name
            present = start_name if has_start else end_name
            raise ValidationError(
                f"Meal {n}: both start and end are required ({missing} is missing while {present} is set)"
            )

    checkpoints: list[Checkpoint] = []
    for f in SPAN_FIELDS:
        wall = walls[f.name]
        if wall is None:
            continue
        instant = local_to_instant(event_date, wall, offset)
        crossed = False
        if checkpoints and instant <= checkpoints[-1].instant:
            instant += timedelta(hours=24)
            crossed = True
        checkpoints.append(Checkpoint(field=f, instant=instant, crossed_midnight=crossed))

    for prev, cur in zip(checkpoints, checkpoints[1:]):
        if cur.instant <= prev.instant:
            raise ValidationError(
                f"Times must be strictly increasing ({cur.field.label} is not after {prev.field.label})"
            )
    return checkpoints


class ShiftEditService:
    """Manual correction of one worker's shift on one event day.

    The day's entry set is replaced as a unit: the store deletes and inserts in
    one transaction, and edits of the same (worker, day) are serialized here.
    """

    def __init__(
        self,
        entries: TimeEntryRepository,
        events: EventRepository,
        workers: WorkerDirectory,
        *,
        tz_name: str,
        locks: Optional[KeyedLocks] = None,
    ):
        self._entries = entries
        self._events = events
        self._workers = workers
        self._tz_name = tz_name
        self._locks = locks or KeyedLocks()

    def edit_shift(
        self,
        *,
        current_role: Optional[Role],
        actor_id: str,
        event_id: str,
        worker_id: str,
        spans: Mapping[str, Optional[str]],
    ) -> ShiftEditResult:
        if current_role not in PRIVILEGED_ROLES:
            raise AuthorizationError("Only managers, HR, executives or admins can edit timesheets")

        event = self._events.get_by_id(event_id)
        if not event:
            raise NotFoundError("Event not found")
        if worker_id not in set(self._events.list_team_worker_ids(event_id)):
            raise NotFoundError("Worker is not on this event's team")

        offset = local_offset_for_date(event.event_date, self._tz_name)
        checkpoints = build_checkpoints(event.event_date, spans, offset=offset)
        if not checkpoints:
            raise ValidationError("Please enter at least one time")

        division = self._workers.division_for(worker_id)
        note = f"Manual timesheet edit by {actor_id}"
        new_entries = [
            TimeEntry(
                worker_id=worker_id,
                action=cp.field.action,
                timestamp=cp.instant,
                event_id=event_id,
                division=division,
                note=note,
            )
            for cp in checkpoints
        ]
        # Cover the next local day too: an overnight shift's tail lives there.
        window = local_day_window(event.event_date, self._tz_name, extra_days=1)

        with self._locks.hold((worker_id, event.event_date)):
            result = self._entries.replace_for_worker(
                worker_id=worker_id,
                event_id=event_id,
                window=window,
                entries=new_entries,
            )

        logger.info(
            "Shift edited event=%s worker=%s by=%s deleted=%d inserted=%d tz=%s",
            event_id, worker_id, actor_id, result.deleted, len(result.inserted), offset.abbreviation,
        )
        return ShiftEditResult(
            worker_id=worker_id,
            event_id=event_id,
            checkpoints=checkpoints,
            deleted=result.deleted,
            inserted=len(result.inserted),
            offset_abbreviation=offset.abbreviation,
        )
