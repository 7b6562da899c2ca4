from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Worker
from .repository import WorkerRepository


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT worker_id, full_name, division, is_active FROM workers WHERE worker_id=%s",
                (worker_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Worker(
                worker_id=str(row["worker_id"]),
                full_name=row.get("full_name") or "",
                division=row.get("division"),
                is_active=bool(row.get("is_active", True)),
            )
