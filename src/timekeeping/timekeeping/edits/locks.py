from __future__ import annotations

from collections import defaultdict
from contextlib import contextmanager
from threading import Lock
from typing import Hashable, Iterator


class KeyedLocks:
    """One in-process lock per key, e.g. (worker_id, event_date)."""

    def __init__(self):
        self._guard = Lock()
        self._locks: dict[Hashable, Lock] = defaultdict(Lock)
        self._holders: dict[Hashable, int] = defaultdict(int)

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            lock = self._locks[key]
            self._holders[key] += 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._holders[key] -= 1
                if self._holders[key] == 0:
                    del self._holders[key]
                    del self._locks[key]
