from __future__ import annotations

from typing import Sequence

from ..core.enums import AttendanceStatus, ClockAction
from ..entries.model import TimeEntry

_STATUS_BY_LAST_ACTION = {
    ClockAction.CLOCK_IN: AttendanceStatus.CLOCKED_IN,
    ClockAction.MEAL_END: AttendanceStatus.CLOCKED_IN,
    ClockAction.MEAL_START: AttendanceStatus.ON_MEAL,
    ClockAction.CLOCK_OUT: AttendanceStatus.CLOCKED_OUT,
}


def classify_status(entries: Sequence[TimeEntry]) -> AttendanceStatus:
    """Status from the chronologically last action of a sorted stream."""
    if not entries:
        return AttendanceStatus.CLOCKED_OUT
    return _STATUS_BY_LAST_ACTION[entries[-1].action]
