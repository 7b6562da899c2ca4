from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Sequence

from ...shifts.model import MealPeriod, WorkInterval


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_duration(self, intervals: Sequence[WorkInterval], meals: Sequence[MealPeriod]) -> timedelta:
        raise NotImplementedError
