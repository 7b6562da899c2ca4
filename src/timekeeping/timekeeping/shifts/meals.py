from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import ClockAction, LivePolicy
from ..entries.model import TimeEntry
from .meal_strategies.base import MealStrategy
from .meal_strategies.explicit_strategy import ExplicitMealStrategy
from .meal_strategies.gap_strategy import GapInferenceStrategy
from .model import MealResolution, WorkInterval

_MEAL_ACTIONS = frozenset({ClockAction.MEAL_START, ClockAction.MEAL_END})


@dataclass
class MealStrategyFactory:
    """Factory Pattern: explicit markers always win; inference only when there are none.

    A single dangling marker still counts as "explicit", so one worker's shift
    never mixes the two strategies.
    """

    def for_stream(self, entries: Sequence[TimeEntry]) -> MealStrategy:
        if any(e.action in _MEAL_ACTIONS for e in entries):
            return ExplicitMealStrategy()
        return GapInferenceStrategy()


def resolve_meals(
    entries: Sequence[TimeEntry],
    intervals: Sequence[WorkInterval],
    *,
    policy: LivePolicy,
    now: Optional[datetime] = None,
    factory: Optional[MealStrategyFactory] = None,
) -> MealResolution:
    strategy = (factory or MealStrategyFactory()).for_stream(entries)
    return strategy.resolve(entries=entries, intervals=intervals, policy=policy, now=now)
