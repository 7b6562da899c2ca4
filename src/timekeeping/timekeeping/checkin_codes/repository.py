from __future__ import annotations

from typing import Optional, Protocol

from .model import CheckinCode


class CheckinCodeRepository(Protocol):
    def get_by_code(self, code: str) -> Optional[CheckinCode]:
        """Look up a code regardless of its active flag (callers check it)."""

        raise NotImplementedError

    def log_checkin(self, *, code_id: str, worker_id: str) -> None:
        raise NotImplementedError
