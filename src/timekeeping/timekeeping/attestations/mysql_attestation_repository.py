from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, to_db_datetime
from .model import Attestation
from .repository import AttestationRepository


class MySQLAttestationRepository(AttestationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, attestation: Attestation) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attestations(
                    worker_id, entry_id, event_id, form_data_hash, signature_hash, binding_hash, signed_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    attestation.worker_id,
                    attestation.entry_id,
                    attestation.event_id,
                    attestation.form_data_hash,
                    attestation.signature_hash,
                    attestation.binding_hash,
                    to_db_datetime(attestation.signed_at),
                ),
            )
