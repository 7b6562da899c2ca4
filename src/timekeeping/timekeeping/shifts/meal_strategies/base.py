from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from ...core.enums import LivePolicy
from ...entries.model import TimeEntry
from ..model import MealResolution, WorkInterval


class MealStrategy(ABC):
    """Strategy Pattern: how the meal periods of one shift are obtained."""

    @abstractmethod
    def resolve(
        self,
        *,
        entries: Sequence[TimeEntry],
        intervals: Sequence[WorkInterval],
        policy: LivePolicy,
        now: Optional[datetime],
    ) -> MealResolution:
        raise NotImplementedError
