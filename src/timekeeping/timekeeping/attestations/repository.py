from __future__ import annotations

from typing import Protocol

from .model import Attestation


class AttestationRepository(Protocol):
    """Append-only attestation store."""

    def append(self, attestation: Attestation) -> None:
        raise NotImplementedError
