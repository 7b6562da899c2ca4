from __future__ import annotations

import hashlib
import json
import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc, to_iso
from ..entries.model import TimeEntry
from .model import Attestation
from .repository import AttestationRepository

logger = logging.getLogger(__name__)


def _sha256(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def build_clock_out_attestation(
    *,
    entry: TimeEntry,
    signature: str,
    origin: str,
    signed_at: datetime,
) -> Attestation:
    """Hash the clock-out facts, the signature, and the binding of the two."""
    facts = {
        "workerId": entry.worker_id,
        "action": entry.action.value,
        "timestamp": to_iso(entry.timestamp),
        "eventId": entry.event_id,
        "division": entry.division,
    }
    form_data_hash = _sha256(json.dumps(facts, sort_keys=True, separators=(",", ":")))
    signature_hash = _sha256(f"{signature}-{to_iso(entry.timestamp)}-{entry.worker_id}-{origin}")
    binding_hash = _sha256(f"{form_data_hash}-{signature_hash}-{entry.worker_id}")

    return Attestation(
        worker_id=entry.worker_id,
        entry_id=entry.entry_id,
        event_id=entry.event_id,
        form_data_hash=form_data_hash,
        signature_hash=signature_hash,
        binding_hash=binding_hash,
        signed_at=signed_at,
    )


class AttestationService:
    def __init__(self, attestations: AttestationRepository):
        self._attestations = attestations

    def record_clock_out(
        self,
        *,
        entry: TimeEntry,
        signature: str,
        origin: str,
        signed_at: Optional[datetime] = None,
    ) -> Optional[Attestation]:
        """Persist an attestation for a signed clock-out.

        A failure here never undoes the clock-out: it is logged and None is returned.
        """
        attestation = build_clock_out_attestation(
            entry=entry,
            signature=signature,
            origin=origin,
            signed_at=signed_at or now_utc(),
        )
        try:
            self._attestations.append(attestation)
        except Exception:
            logger.exception(
                "Failed to persist clock-out attestation worker=%s entry=%s", entry.worker_id, entry.entry_id
            )
            return None

        logger.info(
            "Clock-out attestation recorded worker=%s binding=%s...", entry.worker_id, attestation.binding_hash[:16]
        )
        return attestation
