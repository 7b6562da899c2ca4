from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..common.datetime_utils import TimeWindow
from ..core.enums import ClockAction
from .model import ReplaceResult, TimeEntry


class TimeEntryRepository(Protocol):
    """Time-entry store contract consumed by the pipeline, the edit writer and the sync path."""

    def find_by_event(self, *, worker_ids: Sequence[str], event_id: str) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def find_in_window(
        self,
        *,
        worker_ids: Sequence[str],
        window: TimeWindow,
        field: str = "timestamp",
    ) -> Sequence[TimeEntry]:
        """Entries whose `field` ("timestamp" or "started_at") lies in the window."""

        raise NotImplementedError

    def find_latest(
        self,
        *,
        worker_id: str,
        actions: Optional[Iterable[ClockAction]] = None,
    ) -> Optional[TimeEntry]:
        raise NotImplementedError

    def find_since(self, *, worker_id: str, since: datetime) -> Sequence[TimeEntry]:
        raise NotImplementedError

    def insert(self, entry: TimeEntry) -> TimeEntry:
        raise NotImplementedError

    def replace_for_worker(
        self,
        *,
        worker_id: str,
        event_id: str,
        window: TimeWindow,
        entries: Sequence[TimeEntry],
    ) -> ReplaceResult:
        """Atomically swap a worker's entry set for one event day.

        Deletes the worker's rows tagged to `event_id`, plus untagged rows inside
        `window`, and inserts `entries`, as one transaction.
        """

        raise NotImplementedError
