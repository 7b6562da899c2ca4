from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import ClockAction, LivePolicy
from ..entries.model import TimeEntry
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from .meals import MealStrategyFactory, resolve_meals
from .model import ShiftSummary
from .normalizer import chronological
from .reconstructor import reconstruct_intervals
from .status import classify_status


def summarize_shift(
    worker_id: str,
    entries: Sequence[TimeEntry],
    *,
    policy: LivePolicy,
    now: Optional[datetime] = None,
    calculator: Optional[PayrollCalculator] = None,
    meal_factory: Optional[MealStrategyFactory] = None,
) -> ShiftSummary:
    """Run one worker's stream through reconstruction, meal resolution and classification."""
    ordered = chronological(entries)
    reconstruction = reconstruct_intervals(ordered, policy=policy, now=now)
    meals = resolve_meals(ordered, reconstruction.intervals, policy=policy, now=now, factory=meal_factory)
    worked = (calculator or StandardPayrollCalculator()).worked_duration(reconstruction.intervals, meals.periods)

    clock_ins = [e.timestamp for e in ordered if e.action == ClockAction.CLOCK_IN]
    clock_outs = [e.timestamp for e in ordered if e.action == ClockAction.CLOCK_OUT]

    return ShiftSummary(
        worker_id=worker_id,
        total_worked=worked,
        intervals=reconstruction.intervals,
        meals=meals,
        first_clock_in=clock_ins[0] if clock_ins else None,
        last_clock_out=clock_outs[-1] if clock_outs else None,
        status=classify_status(ordered),
        anomalies=[*reconstruction.anomalies, *meals.anomalies],
        entries=ordered,
    )
