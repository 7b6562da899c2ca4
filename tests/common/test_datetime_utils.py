from __future__ import annotations

from datetime import date, time, timedelta

import pytest

from src.timekeeping.timekeeping.common.datetime_utils import (
    local_day_window,
    local_offset_for_date,
    local_to_instant,
    parse_hhmm,
    parse_instant,
    to_iso,
)
from src.timekeeping.timekeeping.common.validators import is_valid_checkin_code, normalize_checkin_code, require_checkin_code
from src.timekeeping.timekeeping.core.exceptions import ValidationError
from tests.fakes import utc

TZ = "America/Los_Angeles"


def test_offset_switches_on_dst_start():
    before = local_offset_for_date(date(2026, 3, 7), TZ)
    after = local_offset_for_date(date(2026, 3, 9), TZ)

    assert (before.abbreviation, before.utc_offset) == ("PST", timedelta(hours=-8))
    assert (after.abbreviation, after.utc_offset) == ("PDT", timedelta(hours=-7))


def test_same_wall_clock_maps_to_different_instants_across_dst():
    nine = time(9, 0)
    pst = local_to_instant(date(2026, 3, 7), nine, local_offset_for_date(date(2026, 3, 7), TZ))
    pdt = local_to_instant(date(2026, 3, 9), nine, local_offset_for_date(date(2026, 3, 9), TZ))

    assert pst == utc(2026, 3, 7, 17, 0)
    assert pdt == utc(2026, 3, 9, 16, 0)


def test_local_day_window_is_23_hours_on_spring_forward():
    w = local_day_window(date(2026, 3, 8), TZ)

    assert w.start == utc(2026, 3, 8, 8, 0)
    assert w.end - w.start == timedelta(hours=23)


def test_local_day_window_can_cover_the_next_day():
    w = local_day_window(date(2026, 3, 10), TZ, extra_days=1)

    assert w.start == utc(2026, 3, 10, 7, 0)
    assert w.end == utc(2026, 3, 12, 7, 0)
    assert w.contains(w.start)
    assert not w.contains(w.end)


def test_parse_hhmm():
    assert parse_hhmm("", "Clock in") is None
    assert parse_hhmm(None, "Clock in") is None
    assert parse_hhmm("7:05", "Clock in") == time(7, 5)
    with pytest.raises(ValidationError, match="Clock in"):
        parse_hhmm("25:00", "Clock in")
    with pytest.raises(ValidationError):
        parse_hhmm("noon", "Clock in")


def test_parse_instant_and_back():
    assert parse_instant("2026-03-10T16:00:00Z") == utc(2026, 3, 10, 16, 0)
    assert parse_instant("2026-03-10T09:00:00-07:00") == utc(2026, 3, 10, 16, 0)
    assert to_iso(utc(2026, 3, 10, 16, 0)) == "2026-03-10T16:00:00Z"
    with pytest.raises(ValidationError):
        parse_instant("yesterday")


def test_checkin_code_normalization():
    assert normalize_checkin_code(" ab-1234 ") == "AB1234"
    assert is_valid_checkin_code("ab1234")
    assert is_valid_checkin_code("123456")
    assert not is_valid_checkin_code("ABC123")
    assert not is_valid_checkin_code(None)
    with pytest.raises(ValidationError, match="Invalid code format"):
        require_checkin_code("12345")
