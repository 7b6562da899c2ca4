from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.service import KioskService
from .attestations.mysql_attestation_repository import MySQLAttestationRepository
from .attestations.repository import AttestationRepository
from .attestations.service import AttestationService
from .checkin_codes.mysql_checkin_code_repository import MySQLCheckinCodeRepository
from .checkin_codes.repository import CheckinCodeRepository
from .core.constants import DEFAULT_LOCAL_TIMEZONE, DEFAULT_SYNC_BATCH_TIMEOUT_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .edits.locks import KeyedLocks
from .edits.service import ShiftEditService
from .entries.mysql_entry_repository import MySQLTimeEntryRepository
from .entries.repository import TimeEntryRepository
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import TimesheetService
from .shifts.normalizer import EventStreamNormalizer
from .sync.service import OfflineSyncService
from .workers.mysql_worker_repository import MySQLWorkerRepository
from .workers.repository import WorkerRepository
from .workers.service import WorkerDirectory


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    tz_name: str

    entries_repo: TimeEntryRepository
    events_repo: EventRepository
    workers_repo: WorkerRepository
    codes_repo: CheckinCodeRepository
    attestations_repo: AttestationRepository

    timesheet_service: TimesheetService
    shift_edit_service: ShiftEditService
    kiosk_service: KioskService
    sync_service: OfflineSyncService


def wire_services(
    *,
    entries_repo: TimeEntryRepository,
    events_repo: EventRepository,
    workers_repo: WorkerRepository,
    codes_repo: CheckinCodeRepository,
    attestations_repo: AttestationRepository,
    tz_name: str = DEFAULT_LOCAL_TIMEZONE,
    sync_timeout_seconds: float = DEFAULT_SYNC_BATCH_TIMEOUT_SECONDS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any set of stores (MySQL in the app, in-memory in tests)."""
    workers = WorkerDirectory(workers_repo)
    attestation_service = AttestationService(attestations_repo)

    timesheet_service = TimesheetService(
        events_repo,
        EventStreamNormalizer(entries_repo, tz_name=tz_name),
        calculator=StandardPayrollCalculator(),
    )
    shift_edit_service = ShiftEditService(entries_repo, events_repo, workers, tz_name=tz_name, locks=KeyedLocks())
    kiosk_service = KioskService(entries_repo, codes_repo, workers, attestation_service)
    sync_service = OfflineSyncService(
        entries_repo,
        codes_repo,
        workers,
        attestation_service,
        timeout_seconds=sync_timeout_seconds,
    )

    return Container(
        conn=conn,
        tz_name=tz_name,
        entries_repo=entries_repo,
        events_repo=events_repo,
        workers_repo=workers_repo,
        codes_repo=codes_repo,
        attestations_repo=attestations_repo,
        timesheet_service=timesheet_service,
        shift_edit_service=shift_edit_service,
        kiosk_service=kiosk_service,
        sync_service=sync_service,
    )


def build_container(
    *,
    db_config: dict,
    tz_name: str = DEFAULT_LOCAL_TIMEZONE,
    sync_timeout_seconds: float = DEFAULT_SYNC_BATCH_TIMEOUT_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        entries_repo=MySQLTimeEntryRepository(conn),
        events_repo=MySQLEventRepository(conn),
        workers_repo=MySQLWorkerRepository(conn),
        codes_repo=MySQLCheckinCodeRepository(conn),
        attestations_repo=MySQLAttestationRepository(conn),
        tz_name=tz_name,
        sync_timeout_seconds=sync_timeout_seconds,
        conn=conn,
    )
