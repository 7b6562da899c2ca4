from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Worker:
    worker_id: str
    full_name: str
    division: Optional[str] = None
    is_active: bool = True
