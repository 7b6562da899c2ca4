from __future__ import annotations

from datetime import date, time

import pytest

from src.timekeeping.timekeeping.core.exceptions import NotFoundError
from src.timekeeping.timekeeping.events.model import Event
from src.timekeeping.timekeeping.payroll.service import TimesheetService
from src.timekeeping.timekeeping.shifts.normalizer import EventStreamNormalizer
from tests.fakes import FakeEntriesRepo, FakeEventsRepo, entry, utc

TZ = "America/Los_Angeles"


def _service(rows, events=None):
    events = events or FakeEventsRepo(
        [Event(event_id="ev1", event_date=date(2026, 3, 10))],
        teams={"ev1": ["w1", "w2"]},
    )
    return TimesheetService(events, EventStreamNormalizer(FakeEntriesRepo(rows), tz_name=TZ))


def test_event_timesheet_reports_totals_meals_and_spans():
    svc = _service([
        entry("w1", "clock_in", utc(2026, 3, 10, 16, 0), event_id="ev1"),
        entry("w1", "meal_start", utc(2026, 3, 10, 19, 0), event_id="ev1"),
        entry("w1", "meal_end", utc(2026, 3, 10, 19, 30), event_id="ev1"),
        entry("w1", "clock_out", utc(2026, 3, 11, 0, 0), event_id="ev1"),
    ])

    report = svc.build_event_timesheet("ev1")

    row = report.workers["w1"]
    assert row["totalWorkedMs"] == 27_000_000
    assert row["firstClockIn"] == "2026-03-10T16:00:00Z"
    assert row["lastClockOut"] == "2026-03-11T00:00:00Z"
    assert row["meal1"] == {"start": "2026-03-10T19:00:00Z", "end": "2026-03-10T19:30:00Z"}
    assert row["meal2"] == {"start": None, "end": None}
    assert row["mealSource"] == "explicit"
    assert report.summary == {"workerCount": 2, "entriesFound": 4, "dateQueried": "2026-03-10"}


def test_worker_without_entries_gets_an_empty_row():
    report = _service([]).build_event_timesheet("ev1")

    row = report.workers["w2"]
    assert row["totalWorkedMs"] == 0
    assert row["firstClockIn"] is None
    assert row["status"] == "clocked_out"


def test_dangling_entries_are_warned_and_excluded():
    svc = _service([
        entry("w1", "clock_out", utc(2026, 3, 10, 15, 0), event_id="ev1"),
        entry("w1", "clock_in", utc(2026, 3, 10, 16, 0), event_id="ev1"),
        entry("w1", "clock_out", utc(2026, 3, 10, 18, 0), event_id="ev1"),
        entry("w1", "clock_in", utc(2026, 3, 10, 20, 0), event_id="ev1"),
    ])

    row = svc.build_event_timesheet("ev1").workers["w1"]

    assert row["totalWorkedMs"] == 2 * 3_600_000
    assert row["warnings"] == ["dangling_clock_out", "open_clock_in"]


def test_unknown_event_is_not_found():
    with pytest.raises(NotFoundError):
        _service([]).build_event_timesheet("nope")


def test_overnight_event_reads_across_midnight_without_other_events():
    events = FakeEventsRepo(
        [Event(event_id="ev9", event_date=date(2026, 3, 10), start_time=time(22, 0), end_time=time(2, 0))],
        teams={"ev9": ["w1"]},
    )
    svc = _service(
        [
            entry("w1", "clock_in", utc(2026, 3, 11, 5, 0), event_id="ev9"),
            entry("w1", "clock_out", utc(2026, 3, 11, 9, 0)),
            entry("w1", "clock_in", utc(2026, 3, 11, 17, 0), event_id="other"),
            entry("w1", "clock_out", utc(2026, 3, 11, 20, 0), event_id="other"),
        ],
        events=events,
    )

    row = svc.build_event_timesheet("ev9").workers["w1"]

    assert row["totalWorkedMs"] == 4 * 3_600_000
    assert row["lastClockOut"] == "2026-03-11T09:00:00Z"


def test_live_monitor_counts_open_shift_up_to_now():
    svc = _service([
        entry("w1", "clock_in", utc(2026, 3, 10, 16, 0), event_id="ev1"),
        entry("w2", "clock_in", utc(2026, 3, 10, 15, 0), event_id="ev1"),
        entry("w2", "meal_start", utc(2026, 3, 10, 17, 0), event_id="ev1"),
    ])

    rows = svc.build_live_monitor("ev1", now=utc(2026, 3, 10, 17, 30))

    assert [r["workerId"] for r in rows] == ["w2", "w1"]
    assert rows[0]["onMeal"] is True
    assert rows[0]["liveWorkedMs"] == 2 * 3_600_000
    assert rows[1]["status"] == "clocked_in"
    assert rows[1]["liveWorkedMs"] == int(1.5 * 3_600_000)
