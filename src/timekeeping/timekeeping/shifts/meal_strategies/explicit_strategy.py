from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ...core.constants import MAX_MEAL_PERIODS
from ...core.enums import ClockAction, LivePolicy, MealSource
from ...entries.model import TimeEntry
from ..model import Anomaly, MealPeriod, MealResolution, MealSlot, WorkInterval
from .base import MealStrategy


class ExplicitMealStrategy(MealStrategy):
    """Meals from meal_start/meal_end markers: n-th start pairs with n-th end."""

    def resolve(
        self,
        *,
        entries: Sequence[TimeEntry],
        intervals: Sequence[WorkInterval],
        policy: LivePolicy,
        now: Optional[datetime],
    ) -> MealResolution:
        starts = [e for e in entries if e.action == ClockAction.MEAL_START]
        ends = [e for e in entries if e.action == ClockAction.MEAL_END]

        periods: list[MealPeriod] = []
        slots: list[MealSlot] = []
        anomalies: list[Anomaly] = []
        open_meal_start = None

        for i in range(MAX_MEAL_PERIODS):
            start = starts[i] if i < len(starts) else None
            end = ends[i] if i < len(ends) else None
            slots.append(MealSlot(start=start.timestamp if start else None, end=end.timestamp if end else None))

            if start and end:
                if end.timestamp > start.timestamp:
                    periods.append(MealPeriod(start=start.timestamp, end=end.timestamp))
                else:
                    anomalies.append(
                        Anomaly("meal_end_before_start", end.worker_id, end.timestamp, f"meal {i + 1} ignored")
                    )
            elif start:
                # Only the latest meal_start can still be running.
                still_open = start is starts[-1]
                if still_open:
                    open_meal_start = start.timestamp
                if still_open and policy == LivePolicy.LIVE and now is not None and now > start.timestamp:
                    periods.append(MealPeriod(start=start.timestamp, end=now, is_open=True))
                elif not still_open or policy == LivePolicy.CLOSED:
                    anomalies.append(Anomaly("dangling_meal_start", start.worker_id, start.timestamp))
            elif end:
                anomalies.append(Anomaly("dangling_meal_end", end.worker_id, end.timestamp))

        return MealResolution(
            source=MealSource.EXPLICIT,
            periods=periods,
            slots=(slots[0], slots[1]),
            open_meal_start=open_meal_start,
            anomalies=anomalies,
        )
