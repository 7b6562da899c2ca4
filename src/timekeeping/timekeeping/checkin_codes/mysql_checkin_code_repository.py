from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import CheckinCode
from .repository import CheckinCodeRepository


class MySQLCheckinCodeRepository(CheckinCodeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_code(self, code: str) -> Optional[CheckinCode]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT code_id, code, is_active, target_worker_id
                FROM checkin_codes
                WHERE code=%s
                ORDER BY is_active DESC, created_at DESC
                LIMIT 1
                """,
                (code,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return CheckinCode(
                code_id=str(r["code_id"]),
                code=r["code"],
                is_active=bool(r.get("is_active")),
                target_worker_id=str(r["target_worker_id"]) if r.get("target_worker_id") else None,
            )

    def log_checkin(self, *, code_id: str, worker_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO checkin_logs(code_id, worker_id) VALUES(%s,%s)",
                (code_id, worker_id),
            )
