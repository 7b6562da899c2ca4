from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import TimeWindow, local_day_window


@dataclass(frozen=True)
class Event:
    """External event record; read-only to the timekeeping core."""

    event_id: str
    event_date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    ends_next_day: bool = False
    name: Optional[str] = None

    @property
    def crosses_midnight(self) -> bool:
        if self.ends_next_day:
            return True
        if self.start_time is not None and self.end_time is not None:
            return self.end_time <= self.start_time
        return False


@dataclass(frozen=True)
class EventWindow:
    """What the normalizer needs to know about an event: its id, day and midnight flag."""

    event_id: str
    event_date: date
    crosses_midnight: bool = False

    @classmethod
    def for_event(cls, event: Event) -> "EventWindow":
        return cls(event_id=event.event_id, event_date=event.event_date, crosses_midnight=event.crosses_midnight)

    def day_window(self, tz_name: str) -> TimeWindow:
        return local_day_window(self.event_date, tz_name, extra_days=1 if self.crosses_midnight else 0)
