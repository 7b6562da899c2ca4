from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Event
from .repository import EventRepository


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: str) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT event_id, event_name, event_date, start_time, end_time, ends_next_day
                FROM events
                WHERE event_id=%s
                """,
                (event_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Event(
                event_id=str(r["event_id"]),
                name=r.get("event_name"),
                event_date=r["event_date"],
                start_time=normalize_mysql_time(r.get("start_time")),
                end_time=normalize_mysql_time(r.get("end_time")),
                ends_next_day=bool(r.get("ends_next_day")),
            )

    def list_team_worker_ids(self, event_id: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT worker_id FROM event_teams WHERE event_id=%s ORDER BY worker_id",
                (event_id,),
            )
            return [str(r["worker_id"]) for r in fetchall(cur) if r.get("worker_id")]
