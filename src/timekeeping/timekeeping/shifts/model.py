from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from ..core.enums import AttendanceStatus, MealSource
from ..entries.model import TimeEntry


@dataclass(frozen=True)
class WorkInterval:
    """A clock_in -> clock_out span. `is_open` marks a live interval clamped to now."""

    start: datetime
    end: datetime
    is_open: bool = False

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError("WorkInterval end must be after start")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class MealPeriod:
    start: datetime
    end: datetime
    source: MealSource = MealSource.EXPLICIT
    is_open: bool = False

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError("MealPeriod end must be after start")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True)
class MealSlot:
    """Reported meal checkpoints (either may be missing on a noisy stream)."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None


@dataclass(frozen=True)
class Anomaly:
    """Data-quality issue recovered locally instead of aborting the computation."""

    kind: str
    worker_id: str
    timestamp: datetime
    detail: str = ""


@dataclass(frozen=True)
class Reconstruction:
    intervals: list[WorkInterval]
    open_clock_in: Optional[datetime]
    anomalies: list[Anomaly] = field(default_factory=list)


@dataclass(frozen=True)
class MealResolution:
    source: MealSource
    periods: list[MealPeriod]
    slots: tuple[MealSlot, MealSlot] = (MealSlot(), MealSlot())
    open_meal_start: Optional[datetime] = None
    anomalies: list[Anomaly] = field(default_factory=list)

    @property
    def total(self) -> timedelta:
        return sum((p.duration for p in self.periods), timedelta())


@dataclass(frozen=True)
class ShiftSummary:
    worker_id: str
    total_worked: timedelta
    intervals: list[WorkInterval]
    meals: MealResolution
    first_clock_in: Optional[datetime]
    last_clock_out: Optional[datetime]
    status: AttendanceStatus
    anomalies: list[Anomaly] = field(default_factory=list)
    entries: list[TimeEntry] = field(default_factory=list)

    @property
    def total_worked_ms(self) -> int:
        return int(round(self.total_worked.total_seconds() * 1000))
