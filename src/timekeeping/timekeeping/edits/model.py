from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ClockAction


@dataclass(frozen=True)
class SpanField:
    name: str
    action: ClockAction
    label: str


# Fixed checkpoint order of a shift edit.
SPAN_FIELDS: tuple[SpanField, ...] = (
    SpanField("firstIn", ClockAction.CLOCK_IN, "Clock in"),
    SpanField("firstMealStart", ClockAction.MEAL_START, "Meal 1 start"),
    SpanField("lastMealEnd", ClockAction.MEAL_END, "Meal 1 end"),
    SpanField("secondMealStart", ClockAction.MEAL_START, "Meal 2 start"),
    SpanField("secondMealEnd", ClockAction.MEAL_END, "Meal 2 end"),
    SpanField("lastOut", ClockAction.CLOCK_OUT, "Clock out"),
)

MEAL_PAIRS: tuple[tuple[int, str, str], ...] = (
    (1, "firstMealStart", "lastMealEnd"),
    (2, "secondMealStart", "secondMealEnd"),
)


@dataclass(frozen=True)
class Checkpoint:
    field: SpanField
    instant: datetime
    crossed_midnight: bool = False


@dataclass(frozen=True)
class ShiftEditResult:
    worker_id: str
    event_id: str
    checkpoints: list[Checkpoint]
    deleted: int
    inserted: int
    offset_abbreviation: Optional[str] = None
