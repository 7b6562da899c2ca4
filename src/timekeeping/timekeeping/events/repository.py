from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Event


class EventRepository(Protocol):
    def get_by_id(self, event_id: str) -> Optional[Event]:
        raise NotImplementedError

    def list_team_worker_ids(self, event_id: str) -> Sequence[str]:
        raise NotImplementedError
