from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import TimeWindow
from ..core.enums import ClockAction
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    from_db_datetime,
    in_clause,
    to_db_datetime,
)
from .model import ReplaceResult, TimeEntry
from .repository import TimeEntryRepository

_COLUMNS = "entry_id, worker_id, action, timestamp, started_at, event_id, division, note"
_WINDOW_FIELDS = {"timestamp", "started_at"}


def _row_to_entry(r: dict) -> TimeEntry:
    return TimeEntry(
        entry_id=int(r["entry_id"]),
        worker_id=str(r["worker_id"]),
        action=ClockAction(r["action"]),
        timestamp=from_db_datetime(r["timestamp"]),
        started_at=from_db_datetime(r.get("started_at")),
        event_id=r.get("event_id"),
        division=r.get("division") or "",
        note=r.get("note"),
    )


def _insert(cur, entry: TimeEntry) -> TimeEntry:
    cur.execute(
        """
        INSERT INTO time_entries(worker_id, action, timestamp, started_at, event_id, division, note)
        VALUES(%s,%s,%s,%s,%s,%s,%s)
        """,
        (
            entry.worker_id,
            entry.action.value,
            to_db_datetime(entry.timestamp),
            to_db_datetime(entry.started_at),
            entry.event_id,
            entry.division,
            entry.note,
        ),
    )
    return TimeEntry(
        entry_id=int(cur.lastrowid),
        worker_id=entry.worker_id,
        action=entry.action,
        timestamp=entry.timestamp,
        started_at=entry.started_at,
        event_id=entry.event_id,
        division=entry.division,
        note=entry.note,
    )


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_event(self, *, worker_ids: Sequence[str], event_id: str) -> Sequence[TimeEntry]:
        if not worker_ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE worker_id IN ({in_clause(worker_ids)}) AND event_id=%s
                ORDER BY timestamp ASC
                """,
                (*worker_ids, event_id),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def find_in_window(
        self,
        *,
        worker_ids: Sequence[str],
        window: TimeWindow,
        field: str = "timestamp",
    ) -> Sequence[TimeEntry]:
        if field not in _WINDOW_FIELDS:
            raise ValueError(f"Unsupported window field: {field!r}")
        if not worker_ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE worker_id IN ({in_clause(worker_ids)})
                  AND {field} >= %s AND {field} < %s
                ORDER BY {field} ASC
                """,
                (*worker_ids, to_db_datetime(window.start), to_db_datetime(window.end)),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def find_latest(
        self,
        *,
        worker_id: str,
        actions: Optional[Iterable[ClockAction]] = None,
    ) -> Optional[TimeEntry]:
        clauses = ["worker_id=%s"]
        params: list[object] = [worker_id]
        action_values = [a.value for a in (actions or [])]
        if action_values:
            clauses.append(f"action IN ({in_clause(action_values)})")
            params.extend(action_values)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE {" AND ".join(clauses)}
                ORDER BY timestamp DESC, entry_id DESC
                LIMIT 1
                """,
                tuple(params),
            )
            r = fetchone(cur)
            return _row_to_entry(r) if r else None

    def find_since(self, *, worker_id: str, since: datetime) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_entries
                WHERE worker_id=%s AND timestamp >= %s
                ORDER BY timestamp ASC
                """,
                (worker_id, to_db_datetime(since)),
            )
            return [_row_to_entry(r) for r in fetchall(cur)]

    def insert(self, entry: TimeEntry) -> TimeEntry:
        with db_cursor(self._conn_factory) as (_, cur):
            return _insert(cur, entry)

    def replace_for_worker(
        self,
        *,
        worker_id: str,
        event_id: str,
        window: TimeWindow,
        entries: Sequence[TimeEntry],
    ) -> ReplaceResult:
        scope = """
            worker_id=%s
            AND (event_id=%s OR (event_id IS NULL AND timestamp >= %s AND timestamp < %s))
        """
        params = (worker_id, event_id, to_db_datetime(window.start), to_db_datetime(window.end))

        with db_cursor(self._conn_factory) as (_, cur):
            # Lock the day's rows so a concurrent edit of the same worker/day waits for us.
            cur.execute(f"SELECT entry_id FROM time_entries WHERE {scope} FOR UPDATE", params)
            fetchall(cur)

            cur.execute(f"DELETE FROM time_entries WHERE {scope}", params)
            deleted = int(cur.rowcount)
            inserted = [_insert(cur, e) for e in entries]
            return ReplaceResult(deleted=deleted, inserted=inserted)
