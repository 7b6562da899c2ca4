from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

import pytz

from ..core.exceptions import ValidationError

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


@dataclass(frozen=True)
class TimeWindow:
    """Half-open absolute window [start, end) in UTC."""

    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


@dataclass(frozen=True)
class LocalOffset:
    abbreviation: str
    utc_offset: timedelta


def parse_instant(value) -> datetime:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Naive values are taken to be UTC already (this is how the store hands them back).
    """
    if isinstance(value, datetime):
        dt = value
    else:
        s = str(value or "").strip()
        if not s:
            raise ValidationError("Timestamp is required")
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            raise ValidationError(f"Invalid timestamp: {value!r}")
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def now_utc() -> datetime:
    """Current instant.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def parse_hhmm(value: Optional[str], field_name: str) -> Optional[time]:
    """Parse a local wall-clock "HH:mm" (seconds optional). Blank means unset."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name}: invalid time {value!r} (expected HH:mm)")
    v = value.strip()
    if not v:
        return None
    m = _HHMM_RE.match(v)
    if not m:
        raise ValidationError(f"{field_name}: invalid time {v!r} (expected HH:mm)")
    hh, mm, ss = int(m.group(1)), int(m.group(2)), int(m.group(3) or 0)
    if hh > 23 or mm > 59 or ss > 59:
        raise ValidationError(f"{field_name}: invalid time {v!r} (expected HH:mm)")
    return time(hh, mm, ss)


def get_timezone(name: str):
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        raise ValidationError(f"Unknown timezone: {name!r}")


def local_offset_for_date(day: date, tz_name: str) -> LocalOffset:
    """Standard/daylight offset in effect on `day`, read from local noon."""
    tz = get_timezone(tz_name)
    noon = tz.localize(datetime.combine(day, time(12, 0)))
    return LocalOffset(abbreviation=noon.tzname(), utc_offset=noon.utcoffset())


def local_to_instant(day: date, wall: time, offset: LocalOffset) -> datetime:
    naive = datetime.combine(day, wall)
    return (naive - offset.utc_offset).replace(tzinfo=timezone.utc)


def local_midnight(day: date, tz_name: str) -> datetime:
    tz = get_timezone(tz_name)
    return tz.localize(datetime.combine(day, time(0, 0))).astimezone(timezone.utc)


def local_day_window(day: date, tz_name: str, *, extra_days: int = 0) -> TimeWindow:
    """Local civil day(s) starting at `day`, as an absolute UTC window."""
    return TimeWindow(
        start=local_midnight(day, tz_name),
        end=local_midnight(day + timedelta(days=1 + extra_days), tz_name),
    )



def millis(delta: timedelta) -> int:
    return int(round(delta.total_seconds() * 1000))
