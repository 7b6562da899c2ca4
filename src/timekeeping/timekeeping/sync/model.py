from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import parse_instant
from ..core.enums import ClockAction
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class QueuedAction:
    """One action a kiosk recorded while offline."""

    local_id: str
    code: str
    action: ClockAction
    timestamp: datetime
    signature: Optional[str] = None
    event_id: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "QueuedAction":
        if not isinstance(payload, dict):
            raise ValidationError("Invalid action payload")
        try:
            action = ClockAction(payload.get("action"))
        except ValueError:
            raise ValidationError(f"Invalid action: {payload.get('action')!r}")
        ts = payload.get("timestamp") or payload.get("originalTimestamp")
        return cls(
            local_id=str(payload.get("localId") or ""),
            code=payload.get("code") or "",
            action=action,
            timestamp=parse_instant(ts),
            signature=payload.get("signature") or None,
            event_id=payload.get("eventId") or None,
        )


@dataclass(frozen=True)
class SyncItemResult:
    local_id: str
    success: bool
    error: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"localId": self.local_id, "success": self.success}
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class SyncReport:
    results: list[SyncItemResult] = field(default_factory=list)

    @property
    def synced(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.success)

    def to_dict(self) -> dict:
        return {
            "synced": self.synced,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
        }
