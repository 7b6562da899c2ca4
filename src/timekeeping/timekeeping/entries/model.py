from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ClockAction


@dataclass(frozen=True)
class TimeEntry:
    """One immutable clock action.

    Entries are never updated in place; a correction deletes and re-inserts the
    affected set (see TimeEntryRepository.replace_for_worker).
    """

    worker_id: str
    action: ClockAction
    timestamp: datetime
    division: str
    event_id: Optional[str] = None
    note: Optional[str] = None
    entry_id: Optional[int] = None
    started_at: Optional[datetime] = None

    def dedupe_key(self) -> tuple:
        if self.entry_id is not None:
            return ("id", self.entry_id)
        return ("k", self.worker_id, self.action.value, self.timestamp)


@dataclass(frozen=True)
class ReplaceResult:
    deleted: int
    inserted: list[TimeEntry]
