# api/attendance/verification_service.py

import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from api.attendance.attendance_schema import (
    AdmissionEntry,
    AttendanceOut,
    Claimant,
    VerificationOutcome,
    VerificationStatus,
)
from api.attendance.attendance_service import AttendanceService
from api.geo.geo_schema import Coordinate
from api.geo.geo_service import verify_geofence
from api.sessions.sessions_service import SessionService
from config.settings import Settings, get_settings
from helpers.time_helper import ensure_utc, now_utc
from utils.exceptions import AlreadyRecorded

logger = logging.getLogger(__name__)


class VerificationService:
    """
    Runs one scan attempt through lookup, expiry, geofence, duplicate check
    and commit, in that order. Every rejection is a terminal outcome; nothing
    is retried here. ``StorageUnavailable`` propagates to the caller.
    """

    def __init__(
        self,
        db: Session,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = now_utc,
        sessions: Optional[SessionService] = None,
        ledger: Optional[AttendanceService] = None,
    ):
        self.settings = settings or get_settings()
        self.clock = clock
        self.sessions = sessions or SessionService(db, self.settings)
        self.ledger = ledger or AttendanceService(db, self.settings)

    def verify(
        self,
        session_id: str,
        claimant: Claimant,
        position: Coordinate,
        accuracy_meters: Optional[float] = None,
    ) -> VerificationOutcome:
        session_id = (session_id or "").strip()

        session = self.sessions.get(session_id)
        if session is None:
            logger.info(f"Rejected {claimant.id}: unknown session {session_id!r}")
            return VerificationOutcome(
                status=VerificationStatus.invalid_session,
                message="Invalid QR code - session not found",
                session_id=session_id,
            )

        label = session.label
        now = ensure_utc(self.clock())
        if now > ensure_utc(session.expires_at):
            logger.info(f"Rejected {claimant.id}: session {session_id} expired")
            return VerificationOutcome(
                status=VerificationStatus.expired,
                message="Session has expired",
                session_id=session_id,
                label=label,
            )

        if self.settings.ENFORCE_SESSION_ACTIVE and not session.active:
            logger.info(f"Rejected {claimant.id}: session {session_id} is inactive")
            return VerificationOutcome(
                status=VerificationStatus.inactive,
                message="Session is no longer active",
                session_id=session_id,
                label=label,
            )

        verdict = verify_geofence(position, session.origin, session.radius_meters)
        logger.debug(
            f"Location check for {claimant.id} in {session_id}: "
            f"claimant=({position.latitude:.6f}, {position.longitude:.6f}) "
            f"origin=({session.origin_latitude:.6f}, {session.origin_longitude:.6f}) "
            f"distance={verdict.distance_meters}m allowed={verdict.allowed_meters}m"
        )
        if not verdict.admitted:
            logger.info(
                f"Rejected {claimant.id}: {verdict.distance_meters}m from session {session_id}, "
                f"allowed {verdict.allowed_meters}m"
            )
            return VerificationOutcome(
                status=VerificationStatus.out_of_range,
                message=(
                    f"You are {verdict.distance_meters}m away. "
                    f"Must be within {verdict.allowed_meters:g}m"
                ),
                session_id=session_id,
                label=label,
                distance_meters=verdict.distance_meters,
                allowed_meters=verdict.allowed_meters,
            )

        if self.ledger.has_admitted(session_id, claimant.id):
            return self._already_marked(session_id, label)

        entry = AdmissionEntry(
            session_id=session_id,
            claimant_id=claimant.id,
            claimant_email=claimant.email,
            reported_position=position,
            accuracy_meters=accuracy_meters,
            distance_meters=verdict.distance_meters,
            recorded_at=now,
            label=label,
        )
        try:
            rec = self.ledger.record(entry)
        except AlreadyRecorded:
            return self._already_marked(session_id, label)

        logger.info(f"Admitted {claimant.id} to session {session_id} at {verdict.distance_meters}m")
        return VerificationOutcome(
            status=VerificationStatus.admitted,
            message="Attendance marked successfully",
            session_id=session_id,
            label=label,
            distance_meters=verdict.distance_meters,
            allowed_meters=verdict.allowed_meters,
            record=AttendanceOut.model_validate(rec),
        )

    def _already_marked(self, session_id: str, label: Optional[str]) -> VerificationOutcome:
        return VerificationOutcome(
            status=VerificationStatus.already_marked,
            message="You have already marked attendance for this session",
            session_id=session_id,
            label=label,
        )
