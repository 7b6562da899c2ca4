from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Attestation:
    """Hash-bound proof that a clock-out signature belongs to specific shift facts."""

    worker_id: str
    form_data_hash: str
    signature_hash: str
    binding_hash: str
    signed_at: datetime
    entry_id: Optional[int] = None
    event_id: Optional[str] = None
