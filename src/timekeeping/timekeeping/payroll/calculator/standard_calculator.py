from __future__ import annotations

from datetime import timedelta
from typing import Sequence

from ...shifts.model import MealPeriod, WorkInterval
from .base import PayrollCalculator


def _overlap(a_start, a_end, b_start, b_end) -> timedelta:
    start = max(a_start, b_start)
    end = min(a_end, b_end)
    return end - start if end > start else timedelta()


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: sum(intervals) - meal time taken inside them, not below 0.

    Inferred meals sit in the gaps between intervals and so deduct nothing.
    """

    def worked_duration(self, intervals: Sequence[WorkInterval], meals: Sequence[MealPeriod]) -> timedelta:
        total = sum((iv.duration for iv in intervals), timedelta())
        for meal in meals:
            for iv in intervals:
                total -= _overlap(iv.start, iv.end, meal.start, meal.end)
        return max(total, timedelta())
