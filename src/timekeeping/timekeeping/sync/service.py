from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Sequence

from ..attestations.service import AttestationService
from ..checkin_codes.repository import CheckinCodeRepository
from ..common.datetime_utils import now_utc, to_iso
from ..common.validators import require_checkin_code
from ..core.constants import DEFAULT_SYNC_BATCH_TIMEOUT_SECONDS, OFFLINE_SYNC_ORIGIN
from ..core.enums import ClockAction
from ..core.exceptions import DomainError, ValidationError
from ..entries.model import TimeEntry
from ..entries.repository import TimeEntryRepository
from ..workers.service import WorkerDirectory
from .model import QueuedAction, SyncItemResult, SyncReport

logger = logging.getLogger(__name__)

SHARED_CODE_ERROR = "This code is not assigned to a worker. Offline sync requires a personal code."
INVALID_CODE_ERROR = "Invalid or expired code"
TIMEOUT_ERROR = "Sync batch timed out before this action was processed"


class OfflineSyncService:
    """Replays a kiosk's offline queue in original order, one item at a time.

    A bad item is reported on its own and never fails the batch.
    """

    def __init__(
        self,
        entries: TimeEntryRepository,
        codes: CheckinCodeRepository,
        workers: WorkerDirectory,
        attestations: AttestationService,
        *,
        timeout_seconds: float = DEFAULT_SYNC_BATCH_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._entries = entries
        self._codes = codes
        self._workers = workers
        self._attestations = attestations
        self._timeout = timedelta(seconds=timeout_seconds)
        self._clock = clock

    def sync(self, actions: Sequence[dict]) -> SyncReport:
        if not actions:
            raise ValidationError("No actions to sync")

        deadline = self._clock() + self._timeout
        results: list[SyncItemResult] = []
        queued: list[QueuedAction] = []
        for payload in actions:
            try:
                queued.append(QueuedAction.from_payload(payload))
            except ValidationError as e:
                local_id = str(payload.get("localId") or "") if isinstance(payload, dict) else ""
                results.append(SyncItemResult(local_id=local_id, success=False, error=str(e)))

        # Causal order, independent of the order the client sent them in.
        queued.sort(key=lambda a: a.timestamp)

        logged_codes: set[str] = set()
        for item in queued:
            if self._clock() >= deadline:
                results.append(SyncItemResult(local_id=item.local_id, success=False, error=TIMEOUT_ERROR))
                continue
            try:
                self._apply(item, logged_codes)
                results.append(SyncItemResult(local_id=item.local_id, success=True))
            except DomainError as e:
                results.append(SyncItemResult(local_id=item.local_id, success=False, error=str(e)))
            except Exception as e:
                logger.exception("Offline sync item failed localId=%s", item.local_id)
                results.append(SyncItemResult(local_id=item.local_id, success=False, error=str(e) or "Sync failed"))

        report = SyncReport(results=results)
        logger.info("Offline sync batch size=%d synced=%d failed=%d", len(actions), report.synced, report.failed)
        return report

    def _apply(self, item: QueuedAction, logged_codes: set[str]) -> None:
        code_value = require_checkin_code(item.code)
        code = self._codes.get_by_code(code_value)
        if not code or not code.is_active:
            raise ValidationError(INVALID_CODE_ERROR)
        if not code.is_personal:
            raise ValidationError(SHARED_CODE_ERROR)

        worker_id = code.target_worker_id
        entry = self._entries.insert(
            TimeEntry(
                worker_id=worker_id,
                action=item.action,
                timestamp=item.timestamp,
                division=self._workers.division_for(worker_id),
                event_id=item.event_id,
                note=f"Offline kiosk sync (original: {to_iso(item.timestamp)})",
            )
        )

        if item.action == ClockAction.CLOCK_IN and code.code_id not in logged_codes:
            # Entry is committed; a failed log write leaves the item successful.
            try:
                self._codes.log_checkin(code_id=code.code_id, worker_id=worker_id)
                logged_codes.add(code.code_id)
            except Exception:
                logger.exception("Failed to record check-in log code=%s worker=%s", code.code_id, worker_id)

        if item.action == ClockAction.CLOCK_OUT and item.signature:
            self._attestations.record_clock_out(
                entry=entry,
                signature=item.signature,
                origin=OFFLINE_SYNC_ORIGIN,
            )
