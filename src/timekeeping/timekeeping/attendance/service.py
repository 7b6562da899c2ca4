from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..attestations.service import AttestationService
from ..checkin_codes.model import CheckinCode
from ..checkin_codes.repository import CheckinCodeRepository
from ..common.datetime_utils import millis, now_utc, parse_instant
from ..common.validators import require_checkin_code
from ..core.constants import AUTO_MEAL_END_NOTE, KIOSK_NOTE, KIOSK_ORIGIN, SIGNED_CLOCK_OUT_NOTE
from ..core.enums import AttendanceStatus, ClockAction, LivePolicy
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..entries.model import TimeEntry
from ..entries.repository import TimeEntryRepository
from ..shifts.summary import summarize_shift
from ..workers.service import WorkerDirectory
from .model import ClockActionResult, CodeValidation, LiveShiftSummary

logger = logging.getLogger(__name__)

CLOCK_ACTIONS = (ClockAction.CLOCK_IN, ClockAction.CLOCK_OUT)


class KioskService:
    """Live clock actions taken at a kiosk with a personal check-in code."""

    def __init__(
        self,
        entries: TimeEntryRepository,
        codes: CheckinCodeRepository,
        workers: WorkerDirectory,
        attestations: AttestationService,
    ):
        self._entries = entries
        self._codes = codes
        self._workers = workers
        self._attestations = attestations

    def _resolve_code(self, raw_code) -> CheckinCode:
        code = self._codes.get_by_code(require_checkin_code(raw_code))
        if not code or not code.is_active:
            raise NotFoundError("Invalid or expired code")
        if not code.is_personal:
            raise ValidationError(
                "This code is not assigned to a worker. Generate a personal check-in code for the worker and try again."
            )
        return code

    def _current_state(self, worker_id: str) -> tuple[Optional[TimeEntry], Optional[TimeEntry]]:
        last_clock = self._entries.find_latest(worker_id=worker_id, actions=CLOCK_ACTIONS)
        last_any = self._entries.find_latest(worker_id=worker_id)
        return last_clock, last_any

    def validate_code(self, raw_code) -> CodeValidation:
        code = self._resolve_code(raw_code)
        worker_id = code.target_worker_id
        last_clock, last_any = self._current_state(worker_id)

        clocked_in = bool(last_clock and last_clock.action == ClockAction.CLOCK_IN)
        if clocked_in and last_any and last_any.action == ClockAction.MEAL_START:
            status = AttendanceStatus.ON_MEAL
        elif clocked_in:
            status = AttendanceStatus.CLOCKED_IN
        else:
            status = AttendanceStatus.CLOCKED_OUT

        return CodeValidation(
            worker_id=worker_id,
            code_id=code.code_id,
            name=self._workers.display_name(worker_id),
            status=status,
            clocked_in_at=last_clock.timestamp if clocked_in else None,
        )

    def perform_action(
        self,
        raw_code,
        action,
        *,
        timestamp=None,
        signature: Optional[str] = None,
        event_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ClockActionResult:
        code = self._resolve_code(raw_code)
        try:
            action = ClockAction(action)
        except ValueError:
            raise ValidationError("Invalid action. Must be one of: clock_in, clock_out, meal_start, meal_end")

        at = parse_instant(timestamp) if timestamp else (now or now_utc())
        worker_id = code.target_worker_id
        division = self._workers.division_for(worker_id)
        last_clock, last_any = self._current_state(worker_id)
        last_action = last_any.action if last_any else None

        auto_meal_end = False
        if action == ClockAction.CLOCK_IN:
            if last_clock and last_clock.action == ClockAction.CLOCK_IN:
                raise ConflictError("Worker is already clocked in")
        elif action == ClockAction.CLOCK_OUT:
            if not last_clock or last_clock.action != ClockAction.CLOCK_IN:
                raise ConflictError("Worker is not clocked in")
            if last_action == ClockAction.MEAL_START:
                self._entries.insert(
                    TimeEntry(
                        worker_id=worker_id,
                        action=ClockAction.MEAL_END,
                        timestamp=at,
                        division=division,
                        event_id=event_id,
                        note=AUTO_MEAL_END_NOTE,
                    )
                )
                auto_meal_end = True
        elif action == ClockAction.MEAL_START:
            if last_action not in (ClockAction.CLOCK_IN, ClockAction.MEAL_END):
                raise ConflictError("Worker must be clocked in to start a meal")
        elif action == ClockAction.MEAL_END:
            if last_action != ClockAction.MEAL_START:
                raise ConflictError("Worker is not on a meal break")

        signed_out = action == ClockAction.CLOCK_OUT and bool(signature)
        entry = self._entries.insert(
            TimeEntry(
                worker_id=worker_id,
                action=action,
                timestamp=at,
                division=division,
                event_id=event_id,
                note=SIGNED_CLOCK_OUT_NOTE if signed_out else KIOSK_NOTE,
            )
        )

        if action == ClockAction.CLOCK_IN:
            self._codes.log_checkin(code_id=code.code_id, worker_id=worker_id)

        attested = False
        if signed_out:
            attested = self._attestations.record_clock_out(
                entry=entry, signature=signature, origin=KIOSK_ORIGIN, signed_at=now
            ) is not None

        logger.info("Kiosk %s worker=%s entry=%s", action.value, worker_id, entry.entry_id)
        return ClockActionResult(
            worker_id=worker_id,
            action=action,
            timestamp=entry.timestamp,
            entry_id=entry.entry_id,
            auto_meal_end=auto_meal_end,
            attested=attested,
        )

    def shift_summary(self, worker_id: str, *, now: Optional[datetime] = None) -> LiveShiftSummary:
        """Where the worker's current shift stands: since the last clock_in, counted up to now."""
        now = now or now_utc()
        if not worker_id or not str(worker_id).strip():
            raise ValidationError("Invalid workerId")

        last_clock = self._entries.find_latest(worker_id=worker_id, actions=CLOCK_ACTIONS)
        if not last_clock or last_clock.action != ClockAction.CLOCK_IN:
            return LiveShiftSummary(active=False, server_now=now)

        entries = [e for e in self._entries.find_since(worker_id=worker_id, since=last_clock.timestamp) if e.timestamp <= now]
        summary = summarize_shift(worker_id, entries, policy=LivePolicy.LIVE, now=now)
        return LiveShiftSummary(
            active=True,
            server_now=now,
            clock_in_at=last_clock.timestamp,
            meal_ms=millis(summary.meals.total),
            worked_ms=summary.total_worked_ms,
            on_meal=summary.status == AttendanceStatus.ON_MEAL,
        )
