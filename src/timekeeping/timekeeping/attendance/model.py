from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import AttendanceStatus, ClockAction


@dataclass(frozen=True)
class CodeValidation:
    worker_id: str
    code_id: str
    name: str
    status: AttendanceStatus
    clocked_in_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "valid": True,
            "workerId": self.worker_id,
            "codeId": self.code_id,
            "name": self.name,
            "status": self.status.value,
            "clockedInAt": to_iso(self.clocked_in_at),
        }


@dataclass(frozen=True)
class ClockActionResult:
    worker_id: str
    action: ClockAction
    timestamp: datetime
    entry_id: Optional[int] = None
    auto_meal_end: bool = False
    attested: bool = False

    def to_dict(self) -> dict:
        return {
            "success": True,
            "workerId": self.worker_id,
            "action": self.action.value,
            "timestamp": to_iso(self.timestamp),
            "entryId": self.entry_id,
            "autoMealEnd": self.auto_meal_end,
            "attested": self.attested,
        }


@dataclass(frozen=True)
class LiveShiftSummary:
    active: bool
    server_now: datetime
    clock_in_at: Optional[datetime] = None
    meal_ms: int = 0
    worked_ms: int = 0
    on_meal: bool = False

    def to_dict(self) -> dict:
        if not self.active:
            return {"active": False, "serverNow": to_iso(self.server_now)}
        return {
            "active": True,
            "clockInAt": to_iso(self.clock_in_at),
            "mealMs": self.meal_ms,
            "workedMs": self.worked_ms,
            "onMeal": self.on_meal,
            "serverNow": to_iso(self.server_now),
        }
