from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles carried in the session; only privileged roles may edit timesheets."""

    ADMIN = "admin"
    MANAGER = "manager"
    HR = "hr"
    EXEC = "exec"
    VENDOR = "vendor"


PRIVILEGED_ROLES = frozenset({Role.ADMIN, Role.MANAGER, Role.HR, Role.EXEC})


class ClockAction(str, Enum):
    """Raw clock action stored on a time entry."""

    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    MEAL_START = "meal_start"
    MEAL_END = "meal_end"


class AttendanceStatus(str, Enum):
    """Live attendance state derived from the last action."""

    CLOCKED_IN = "clocked_in"
    ON_MEAL = "on_meal"
    CLOCKED_OUT = "clocked_out"


class LivePolicy(str, Enum):
    """How an interval (or meal) still open at the end of the stream is counted.

    LIVE  - clamp it to "now" (kiosk status, monitors).
    CLOSED - drop it (historical payroll totals).
    """

    LIVE = "live"
    CLOSED = "closed"


class MealSource(str, Enum):
    EXPLICIT = "explicit"
    INFERRED = "inferred"
    NONE = "none"
