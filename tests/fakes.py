"""In-memory stores implementing the repository protocols, for service and HTTP tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone

from src.timekeeping.timekeeping.checkin_codes.model import CheckinCode
from src.timekeeping.timekeeping.core.enums import ClockAction
from src.timekeeping.timekeeping.entries.model import ReplaceResult, TimeEntry
from src.timekeeping.timekeeping.events.model import Event
from src.timekeeping.timekeeping.workers.model import Worker


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def entry(worker_id, action, ts, *, event_id=None, division="vendor", entry_id=None, started_at=None):
    return TimeEntry(
        worker_id=worker_id,
        action=ClockAction(action),
        timestamp=ts,
        division=division,
        event_id=event_id,
        entry_id=entry_id,
        started_at=started_at,
    )


class FakeEntriesRepo:
    def __init__(self, entries=()):
        self._next_id = 1
        self.rows: list[TimeEntry] = []
        self.fail_inserts_for: set[str] = set()
        for e in entries:
            self.insert(e)

    def find_by_event(self, *, worker_ids, event_id):
        return [e for e in self.rows if e.worker_id in worker_ids and e.event_id == event_id]

    def find_in_window(self, *, worker_ids, window, field="timestamp"):
        out = []
        for e in self.rows:
            value = getattr(e, field)
            if e.worker_id in worker_ids and value is not None and window.contains(value):
                out.append(e)
        return out

    def find_latest(self, *, worker_id, actions=None):
        rows = [e for e in self.rows if e.worker_id == worker_id and (actions is None or e.action in actions)]
        if not rows:
            return None
        return max(rows, key=lambda e: (e.timestamp, e.entry_id))

    def find_since(self, *, worker_id, since):
        rows = [e for e in self.rows if e.worker_id == worker_id and e.timestamp >= since]
        return sorted(rows, key=lambda e: (e.timestamp, e.entry_id))

    def insert(self, e: TimeEntry) -> TimeEntry:
        if e.worker_id in self.fail_inserts_for:
            raise RuntimeError("insert failed")
        saved = replace(e, entry_id=self._next_id)
        self._next_id += 1
        self.rows.append(saved)
        return saved

    def replace_for_worker(self, *, worker_id, event_id, window, entries):
        def doomed(e):
            if e.worker_id != worker_id:
                return False
            return e.event_id == event_id or (e.event_id is None and window.contains(e.timestamp))

        deleted = [e for e in self.rows if doomed(e)]
        self.rows = [e for e in self.rows if not doomed(e)]
        inserted = [self.insert(e) for e in entries]
        return ReplaceResult(deleted=len(deleted), inserted=inserted)

    def for_worker(self, worker_id):
        return sorted((e for e in self.rows if e.worker_id == worker_id), key=lambda e: (e.timestamp, e.entry_id))


class FakeEventsRepo:
    def __init__(self, events=(), teams=None):
        self._events = {e.event_id: e for e in events}
        self._teams = dict(teams or {})

    def get_by_id(self, event_id):
        return self._events.get(event_id)

    def list_team_worker_ids(self, event_id):
        return list(self._teams.get(event_id, []))


class FakeWorkersRepo:
    def __init__(self, workers=()):
        self._workers = {w.worker_id: w for w in workers}

    def get_by_id(self, worker_id):
        return self._workers.get(worker_id)


class FakeCodesRepo:
    def __init__(self, codes=()):
        self._codes = {c.code: c for c in codes}
        self.logs: list[tuple[str, str]] = []
        self.fail_logs = False

    def get_by_code(self, code):
        return self._codes.get(code)

    def log_checkin(self, *, code_id, worker_id):
        if self.fail_logs:
            raise RuntimeError("checkin log store down")
        self.logs.append((code_id, worker_id))


class FakeAttestationsRepo:
    def __init__(self, *, fail=False):
        self.rows = []
        self._fail = fail

    def append(self, attestation):
        if self._fail:
            raise RuntimeError("attestation store down")
        self.rows.append(attestation)


def sample_world():
    """One ordinary event with a two-person team and a personal and a shared code."""
    workers = FakeWorkersRepo([
        Worker(worker_id="w1", full_name="Ana Ruiz", division="wait_staff"),
        Worker(worker_id="w2", full_name="Ben Ito", division=None),
    ])
    events = FakeEventsRepo(
        [Event(event_id="ev1", event_date=date(2026, 3, 10), name="Gala")],
        teams={"ev1": ["w1", "w2"]},
    )
    codes = FakeCodesRepo([
        CheckinCode(code_id="c1", code="AB1234", is_active=True, target_worker_id="w1"),
        CheckinCode(code_id="c2", code="CD5678", is_active=True, target_worker_id=None),
        CheckinCode(code_id="c3", code="EF9012", is_active=False, target_worker_id="w2"),
        CheckinCode(code_id="c4", code="123456", is_active=True, target_worker_id="w2"),
    ])
    return workers, events, codes
