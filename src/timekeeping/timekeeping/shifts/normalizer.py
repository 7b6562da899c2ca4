from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from ..entries.model import TimeEntry
from ..entries.repository import TimeEntryRepository
from ..events.model import EventWindow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedStream:
    entries_by_worker: dict[str, list[TimeEntry]]
    entries_found: int
    strategy: str


def chronological(entries: Iterable[TimeEntry]) -> list[TimeEntry]:
    return sorted(entries, key=lambda e: (e.timestamp, e.entry_id if e.entry_id is not None else -1))


def dedupe(entries: Iterable[TimeEntry]) -> list[TimeEntry]:
    seen: set[tuple] = set()
    out: list[TimeEntry] = []
    for e in entries:
        key = e.dedupe_key()
        if key in seen:
            continue
        seen.add(key)
        out.append(e)
    return out


class EventStreamNormalizer:
    """Collect one event's time entries per worker from the three lookup strategies.

    Priority: entries tagged with the event id; then the event's absolute day
    window (always consulted for events that cross midnight); then the
    secondary `started_at` field over the same window.
    """

    def __init__(self, entries: TimeEntryRepository, *, tz_name: str):
        self._entries = entries
        self._tz_name = tz_name

    def normalize(self, *, worker_ids: Sequence[str], window: EventWindow) -> NormalizedStream:
        worker_ids = list(dict.fromkeys(worker_ids))
        if not worker_ids:
            return NormalizedStream(entries_by_worker={}, entries_found=0, strategy="none")

        day = window.day_window(self._tz_name)
        rows = list(self._entries.find_by_event(worker_ids=worker_ids, event_id=window.event_id))
        strategy = "event_id"

        def same_event(found):
            # A shared window must not leak entries that belong to another event.
            if not window.crosses_midnight:
                return list(found)
            return [e for e in found if e.event_id is None or e.event_id == window.event_id]

        if window.crosses_midnight or not rows:
            by_time = same_event(self._entries.find_in_window(worker_ids=worker_ids, window=day))
            if window.crosses_midnight:
                rows = [*rows, *by_time]
                strategy = "event_id+timestamp"
            else:
                rows = by_time
                strategy = "timestamp"

        if not rows:
            rows = same_event(self._entries.find_in_window(worker_ids=worker_ids, window=day, field="started_at"))
            strategy = "started_at"

        rows = dedupe(rows)
        by_worker: dict[str, list[TimeEntry]] = {uid: [] for uid in worker_ids}
        for e in rows:
            if e.worker_id in by_worker:
                by_worker[e.worker_id].append(e)
        for uid in by_worker:
            by_worker[uid] = chronological(by_worker[uid])

        logger.debug(
            "Normalized event=%s workers=%d entries=%d strategy=%s",
            window.event_id, len(worker_ids), len(rows), strategy,
        )
        return NormalizedStream(entries_by_worker=by_worker, entries_found=len(rows), strategy=strategy)
