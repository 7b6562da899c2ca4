from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CheckinCode:
    """Kiosk check-in code.

    A personal code is bound to exactly one worker (target_worker_id); a shared
    code is not, and cannot identify who is clocking.
    """

    code_id: str
    code: str
    is_active: bool
    target_worker_id: Optional[str] = None

    @property
    def is_personal(self) -> bool:
        return bool(self.target_worker_id)
