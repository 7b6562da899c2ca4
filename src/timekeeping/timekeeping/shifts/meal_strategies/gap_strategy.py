from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ...core.constants import MAX_MEAL_PERIODS
from ...core.enums import LivePolicy, MealSource
from ...entries.model import TimeEntry
from ..model import MealPeriod, MealResolution, MealSlot, WorkInterval
from .base import MealStrategy


class GapInferenceStrategy(MealStrategy):
    """No meal markers: the first positive gaps between work intervals are the meals."""

    def resolve(
        self,
        *,
        entries: Sequence[TimeEntry],
        intervals: Sequence[WorkInterval],
        policy: LivePolicy,
        now: Optional[datetime],
    ) -> MealResolution:
        ordered = sorted(intervals, key=lambda iv: iv.start)
        periods: list[MealPeriod] = []
        for prev, nxt in zip(ordered, ordered[1:]):
            if nxt.start > prev.end:
                periods.append(MealPeriod(start=prev.end, end=nxt.start, source=MealSource.INFERRED))
            if len(periods) >= MAX_MEAL_PERIODS:
                break

        slots = [MealSlot(start=p.start, end=p.end) for p in periods]
        while len(slots) < MAX_MEAL_PERIODS:
            slots.append(MealSlot())

        return MealResolution(
            source=MealSource.INFERRED if periods else MealSource.NONE,
            periods=periods,
            slots=(slots[0], slots[1]),
        )
