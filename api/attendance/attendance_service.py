# api/attendance/attendance_service.py

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from api.attendance.attendance_records_model import AttendanceRecord
from api.attendance.attendance_schema import AdmissionEntry
from config.settings import Settings, get_settings
from utils.database_utils import DatabaseUtils
from utils.exceptions import AlreadyRecorded

logger = logging.getLogger(__name__)

PAIR_CONSTRAINT = "uq_attendance_session_claimant"
# SQLite reports the columns instead of the constraint name
SQLITE_PAIR_VIOLATION = "attendance_records.session_id, attendance_records.claimant_id"


def violates_pair_constraint(exc: IntegrityError) -> bool:
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint:
        return constraint == PAIR_CONSTRAINT
    message = str(exc.orig)
    return PAIR_CONSTRAINT in message or SQLITE_PAIR_VIOLATION in message


class AttendanceService:
    """
    Attendance ledger. Owns admission records and guarantees at most one
    per (session, claimant) through the ``uq_attendance_session_claimant``
    constraint rather than an application lock, so the guarantee holds
    across worker processes.
    """

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()

    def has_admitted(self, session_id: str, claimant_id: str) -> bool:
        with DatabaseUtils.storage_guard(self.db, "checking existing attendance"):
            return DatabaseUtils.exists(
                self.db, AttendanceRecord, session_id=session_id, claimant_id=claimant_id
            )

    def record(self, entry: AdmissionEntry) -> AttendanceRecord:
        rec = AttendanceRecord(
            session_id        = entry.session_id,
            claimant_id       = entry.claimant_id,
            claimant_email    = entry.claimant_email,
            label             = entry.label,
            reported_position = entry.reported_position,
            accuracy_meters   = entry.accuracy_meters,
            distance_meters   = entry.distance_meters,
            recorded_at       = entry.recorded_at,
        )
        with DatabaseUtils.storage_guard(self.db, "recording attendance"):
            self.db.add(rec)
            try:
                self.db.commit()
            except IntegrityError as exc:
                if not violates_pair_constraint(exc):
                    # foreign key, not null: left to storage_guard
                    raise
                self.db.rollback()
                logger.info(
                    f"Concurrent admission for {entry.claimant_id} in {entry.session_id} lost the insert"
                )
                raise AlreadyRecorded(entry.session_id, entry.claimant_id) from exc
            self.db.refresh(rec)
        return rec

    def list_for_session(self, session_id: str, limit: Optional[int] = None) -> List[AttendanceRecord]:
        limit = limit or self.settings.RECORD_LIST_LIMIT
        with DatabaseUtils.storage_guard(self.db, "listing session attendance"):
            return (
                self.db.query(AttendanceRecord)
                    .filter_by(session_id=session_id)
                    .order_by(AttendanceRecord.recorded_at.desc(), AttendanceRecord.id.desc())
                    .limit(limit)
                    .all()
            )

    def list_for_claimant(self, claimant_id: str, limit: Optional[int] = None) -> List[AttendanceRecord]:
        limit = limit or self.settings.HISTORY_LIST_LIMIT
        with DatabaseUtils.storage_guard(self.db, "listing claimant attendance"):
            return (
                self.db.query(AttendanceRecord)
                    .filter_by(claimant_id=claimant_id)
                    .order_by(AttendanceRecord.recorded_at.desc(), AttendanceRecord.id.desc())
                    .limit(limit)
                    .all()
            )
