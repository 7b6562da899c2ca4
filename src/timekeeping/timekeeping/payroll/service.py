from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc, to_iso
from ..core.enums import AttendanceStatus, LivePolicy
from ..core.exceptions import NotFoundError
from ..events.model import Event, EventWindow
from ..events.repository import EventRepository
from ..shifts.model import MealSlot, ShiftSummary
from ..shifts.normalizer import EventStreamNormalizer
from ..shifts.summary import summarize_shift
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimesheetReport:
    workers: dict[str, dict]
    summary: dict


def _slot(slot: MealSlot) -> dict:
    return {"start": to_iso(slot.start), "end": to_iso(slot.end)}


def _worker_row(s: ShiftSummary) -> dict:
    return {
        "totalWorkedMs": s.total_worked_ms,
        "firstClockIn": to_iso(s.first_clock_in),
        "lastClockOut": to_iso(s.last_clock_out),
        "meal1": _slot(s.meals.slots[0]),
        "meal2": _slot(s.meals.slots[1]),
        "mealSource": s.meals.source.value,
        "status": s.status.value,
        "warnings": [a.kind for a in s.anomalies],
    }


class TimesheetService:
    """Per-event totals: the historical payroll read and the live monitor."""

    def __init__(
        self,
        events: EventRepository,
        normalizer: EventStreamNormalizer,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._events = events
        self._normalizer = normalizer
        self._calculator = calculator or StandardPayrollCalculator()

    def _require_event(self, event_id: str) -> Event:
        event = self._events.get_by_id(event_id)
        if not event:
            raise NotFoundError("Event not found")
        return event

    def _summaries(self, event: Event, *, policy: LivePolicy, now: Optional[datetime]):
        worker_ids = list(self._events.list_team_worker_ids(event.event_id))
        stream = self._normalizer.normalize(worker_ids=worker_ids, window=EventWindow.for_event(event))
        summaries = [
            summarize_shift(uid, stream.entries_by_worker.get(uid, []), policy=policy, now=now, calculator=self._calculator)
            for uid in worker_ids
        ]
        return worker_ids, stream, summaries

    def build_event_timesheet(self, event_id: str) -> TimesheetReport:
        """Closed (payroll) totals: intervals still open are not paid."""
        event = self._require_event(event_id)
        worker_ids, stream, summaries = self._summaries(event, policy=LivePolicy.CLOSED, now=None)

        report = TimesheetReport(
            workers={s.worker_id: _worker_row(s) for s in summaries},
            summary={
                "workerCount": len(worker_ids),
                "entriesFound": stream.entries_found,
                "dateQueried": event.event_date.isoformat(),
            },
        )
        logger.info(
            "Timesheet event=%s workers=%d entries=%d strategy=%s",
            event_id, len(worker_ids), stream.entries_found, stream.strategy,
        )
        return report

    def build_live_monitor(self, event_id: str, *, now: Optional[datetime] = None) -> list[dict]:
        """Who is on the clock right now; open intervals and meals run up to `now`."""
        now = now or now_utc()
        event = self._require_event(event_id)
        _, _, summaries = self._summaries(event, policy=LivePolicy.LIVE, now=now)

        rows = [
            {
                "workerId": s.worker_id,
                "status": s.status.value,
                "firstClockIn": to_iso(s.first_clock_in),
                "liveWorkedMs": s.total_worked_ms,
                "onMeal": s.status == AttendanceStatus.ON_MEAL,
            }
            for s in summaries
        ]
        rows.sort(key=lambda r: (r["firstClockIn"] is None, r["firstClockIn"] or ""))
        return rows
