from __future__ import annotations

from ..core.constants import DEFAULT_DIVISION
from .repository import WorkerRepository


class WorkerDirectory:
    """Thin lookups other services need about a worker."""

    def __init__(self, workers: WorkerRepository, *, default_division: str = DEFAULT_DIVISION):
        self._workers = workers
        self._default_division = default_division

    def division_for(self, worker_id: str) -> str:
        worker = self._workers.get_by_id(worker_id)
        return (worker.division if worker else None) or self._default_division

    def display_name(self, worker_id: str) -> str:
        worker = self._workers.get_by_id(worker_id)
        return (worker.full_name.strip() if worker else "") or "User"
