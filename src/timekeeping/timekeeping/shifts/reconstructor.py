from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import ClockAction, LivePolicy
from ..entries.model import TimeEntry
from .model import Anomaly, Reconstruction, WorkInterval

logger = logging.getLogger(__name__)

DANGLING_CLOCK_IN = "dangling_clock_in"
DANGLING_CLOCK_OUT = "dangling_clock_out"
OPEN_CLOCK_IN = "open_clock_in"


def reconstruct_intervals(
    entries: Sequence[TimeEntry],
    *,
    policy: LivePolicy,
    now: Optional[datetime] = None,
) -> Reconstruction:
    """Pair clock_in/clock_out actions of one worker's sorted stream into work intervals.

    A repeated clock_in keeps the first one open; a clock_out with nothing open
    is ignored. Both are reported as anomalies. An interval still open at the
    end of the stream is clamped to `now` under LivePolicy.LIVE and dropped
    under LivePolicy.CLOSED.
    """
    if policy == LivePolicy.LIVE and now is None:
        raise ValueError("LivePolicy.LIVE requires `now`")

    intervals: list[WorkInterval] = []
    anomalies: list[Anomaly] = []
    open_in: Optional[TimeEntry] = None

    for entry in entries:
        if entry.action == ClockAction.CLOCK_IN:
            if open_in is None:
                open_in = entry
            else:
                anomalies.append(
                    Anomaly(DANGLING_CLOCK_IN, entry.worker_id, entry.timestamp, "clock_in while already clocked in")
                )
        elif entry.action == ClockAction.CLOCK_OUT:
            if open_in is None:
                anomalies.append(
                    Anomaly(DANGLING_CLOCK_OUT, entry.worker_id, entry.timestamp, "clock_out without clock_in")
                )
                continue
            if entry.timestamp > open_in.timestamp:
                intervals.append(WorkInterval(start=open_in.timestamp, end=entry.timestamp))
            open_in = None

    open_clock_in = open_in.timestamp if open_in is not None else None
    if open_in is not None:
        if policy == LivePolicy.LIVE:
            if now > open_in.timestamp:
                intervals.append(WorkInterval(start=open_in.timestamp, end=now, is_open=True))
        else:
            anomalies.append(
                Anomaly(OPEN_CLOCK_IN, open_in.worker_id, open_in.timestamp, "clock_in never closed; excluded")
            )

    for a in anomalies:
        logger.warning("Time entry anomaly %s worker=%s at=%s: %s", a.kind, a.worker_id, a.timestamp, a.detail)

    return Reconstruction(intervals=intervals, open_clock_in=open_clock_in, anomalies=anomalies)
