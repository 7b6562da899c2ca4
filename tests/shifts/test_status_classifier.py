from src.timekeeping.timekeeping.core.enums import AttendanceStatus
from src.timekeeping.timekeeping.shifts.status import classify_status
from tests.fakes import entry, utc


def test_empty_stream_is_clocked_out():
    assert classify_status([]) == AttendanceStatus.CLOCKED_OUT


def test_status_follows_last_action():
    t = utc(2026, 3, 10, 16, 0)
    assert classify_status([entry("w1", "clock_in", t)]) == AttendanceStatus.CLOCKED_IN
    assert classify_status([entry("w1", "meal_start", t)]) == AttendanceStatus.ON_MEAL
    assert classify_status([entry("w1", "meal_end", t)]) == AttendanceStatus.CLOCKED_IN
    assert classify_status([entry("w1", "clock_out", t)]) == AttendanceStatus.CLOCKED_OUT
