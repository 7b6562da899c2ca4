from __future__ import annotations

from datetime import date

from src.timekeeping.timekeeping.events.model import EventWindow
from src.timekeeping.timekeeping.shifts.normalizer import EventStreamNormalizer, dedupe
from tests.fakes import FakeEntriesRepo, entry, utc

TZ = "America/Los_Angeles"
# 2026-03-10 is PDT: local midnight is 07:00Z.
DAY = date(2026, 3, 10)


def _normalizer(rows):
    return EventStreamNormalizer(FakeEntriesRepo(rows), tz_name=TZ)


def test_entries_tagged_with_the_event_come_first():
    n = _normalizer([
        entry("w1", "clock_in", utc(2026, 3, 10, 16, 0), event_id="ev1"),
        entry("w1", "clock_out", utc(2026, 3, 10, 20, 0), event_id="ev1"),
        entry("w1", "clock_in", utc(2026, 3, 10, 21, 0)),
    ])

    stream = n.normalize(worker_ids=["w1"], window=EventWindow("ev1", DAY))

    assert stream.strategy == "event_id"
    assert [e.action.value for e in stream.entries_by_worker["w1"]] == ["clock_in", "clock_out"]


def test_falls_back_to_local_day_window_when_nothing_is_tagged():
    n = _normalizer([
        entry("w1", "clock_in", utc(2026, 3, 10, 6, 59)),
        entry("w1", "clock_in", utc(2026, 3, 10, 16, 0)),
        entry("w1", "clock_out", utc(2026, 3, 11, 6, 0)),
        entry("w1", "clock_in", utc(2026, 3, 11, 7, 0)),
    ])

    stream = n.normalize(worker_ids=["w1"], window=EventWindow("ev1", DAY))

    assert stream.strategy == "timestamp"
    assert [e.timestamp for e in stream.entries_by_worker["w1"]] == [
        utc(2026, 3, 10, 16, 0),
        utc(2026, 3, 11, 6, 0),
    ]


def test_falls_back_to_started_at_when_timestamp_window_is_empty():
    n = _normalizer([
        entry("w1", "clock_in", utc(2026, 3, 12, 16, 0), started_at=utc(2026, 3, 10, 16, 0)),
    ])

    stream = n.normalize(worker_ids=["w1"], window=EventWindow("ev1", DAY))

    assert stream.strategy == "started_at"
    assert stream.entries_found == 1


def test_midnight_event_merges_window_and_drops_other_events():
    n = _normalizer([
        entry("w1", "clock_in", utc(2026, 3, 11, 5, 0), event_id="ev1"),
        entry("w1", "clock_out", utc(2026, 3, 11, 9, 0)),
        entry("w1", "clock_in", utc(2026, 3, 11, 16, 0), event_id="ev2"),
        entry("w2", "clock_in", utc(2026, 3, 11, 5, 0)),
    ])

    stream = n.normalize(worker_ids=["w1"], window=EventWindow("ev1", DAY, crosses_midnight=True))

    assert stream.strategy == "event_id+timestamp"
    rows = stream.entries_by_worker["w1"]
    assert [e.action.value for e in rows] == ["clock_in", "clock_out"]
    assert all(e.event_id in (None, "ev1") for e in rows)
    assert "w2" not in stream.entries_by_worker


def test_rows_found_by_both_lookups_are_kept_once():
    n = _normalizer([
        entry("w1", "clock_in", utc(2026, 3, 11, 5, 0), event_id="ev1"),
        entry("w1", "clock_out", utc(2026, 3, 11, 9, 0), event_id="ev1"),
    ])

    stream = n.normalize(worker_ids=["w1"], window=EventWindow("ev1", DAY, crosses_midnight=True))

    assert stream.entries_found == 2


def test_dedupe_falls_back_to_worker_action_timestamp():
    t = utc(2026, 3, 10, 16, 0)
    rows = dedupe([entry("w1", "clock_in", t), entry("w1", "clock_in", t), entry("w2", "clock_in", t)])

    assert len(rows) == 2


def test_every_requested_worker_gets_a_list():
    stream = _normalizer([]).normalize(worker_ids=["w1", "w2"], window=EventWindow("ev1", DAY))

    assert stream.entries_by_worker == {"w1": [], "w2": []}


class CountingEntriesRepo(FakeEntriesRepo):
    def __init__(self, rows):
        super().__init__(rows)
        self.window_queries = []

    def find_in_window(self, *, worker_ids, window, field="timestamp"):
        self.window_queries.append(field)
        return super().find_in_window(worker_ids=worker_ids, window=window, field=field)


def test_midnight_event_never_falls_back_to_other_events_rows():
    repo = CountingEntriesRepo([
        entry("w1", "clock_in", utc(2026, 3, 10, 16, 0), event_id="OTHER"),
        entry("w1", "clock_out", utc(2026, 3, 11, 1, 0), event_id="OTHER"),
    ])
    n = EventStreamNormalizer(repo, tz_name=TZ)

    stream = n.normalize(worker_ids=["w1"], window=EventWindow("ev1", DAY, crosses_midnight=True))

    assert stream.entries_by_worker["w1"] == []
    assert stream.entries_found == 0
    # The timestamp window is read once; only the started_at fallback follows.
    assert repo.window_queries == ["timestamp", "started_at"]


def test_midnight_event_started_at_fallback_drops_other_events():
    n = _normalizer([
        entry("w1", "clock_in", utc(2026, 3, 20, 16, 0), event_id="OTHER", started_at=utc(2026, 3, 10, 16, 0)),
        entry("w1", "clock_in", utc(2026, 3, 20, 17, 0), started_at=utc(2026, 3, 10, 17, 0)),
    ])

    stream = n.normalize(worker_ids=["w1"], window=EventWindow("ev1", DAY, crosses_midnight=True))

    assert stream.strategy == "started_at"
    assert [e.event_id for e in stream.entries_by_worker["w1"]] == [None]
