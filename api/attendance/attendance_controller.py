# api/attendance/attendance_controller.py

from typing import Any, Dict, List, Optional
from fastapi import HTTPException, Response, status
from sqlalchemy.orm import Session

from api.attendance.attendance_service import AttendanceService
from api.attendance.verification_service import VerificationService
from api.attendance.attendance_schema import (
    AttendanceOut,
    Claimant,
    MarkAttendanceIn,
    VerificationOutcome,
    VerificationStatus,
)
from api.sessions.sessions_controller import storage_unavailable
from api.sessions.sessions_service import SessionService
from config.settings import Settings
from utils.exceptions import StorageUnavailable

OUTCOME_STATUS_CODES = {
    VerificationStatus.admitted:        status.HTTP_201_CREATED,
    VerificationStatus.already_marked:  status.HTTP_200_OK,
    VerificationStatus.invalid_session: status.HTTP_404_NOT_FOUND,
    VerificationStatus.expired:         status.HTTP_410_GONE,
    VerificationStatus.inactive:        status.HTTP_410_GONE,
    VerificationStatus.out_of_range:    status.HTTP_403_FORBIDDEN,
}


class AttendanceController:
    @staticmethod
    def mark(
        payload: MarkAttendanceIn,
        response: Response,
        db: Session,
        settings: Settings,
        current_user: Dict[str, Any],
    ) -> VerificationOutcome:
        claimant = Claimant(id=current_user["id"], email=current_user.get("email"))
        svc = VerificationService(db, settings)
        try:
            outcome = svc.verify(
                payload.session_id,
                claimant,
                payload.location,
                accuracy_meters=payload.accuracy_meters,
            )
        except StorageUnavailable as e:
            raise storage_unavailable(e)

        response.status_code = OUTCOME_STATUS_CODES[outcome.status]
        return outcome

    @staticmethod
    def list_session_records(
        session_id: str,
        db: Session,
        settings: Settings,
        current_user: Dict[str, Any],
        limit: Optional[int] = None,
    ) -> List[AttendanceOut]:
        try:
            session = SessionService(db, settings).get(session_id)
            if session is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
            if session.issuer_id != current_user["id"]:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Only the session issuer can view its attendance",
                )
            rows = AttendanceService(db, settings).list_for_session(session_id, limit)
        except StorageUnavailable as e:
            raise storage_unavailable(e)
        return [AttendanceOut.model_validate(r) for r in rows]

    @staticmethod
    def list_my_records(
        db: Session,
        settings: Settings,
        current_user: Dict[str, Any],
        limit: Optional[int] = None,
    ) -> List[AttendanceOut]:
        try:
            rows = AttendanceService(db, settings).list_for_claimant(current_user["id"], limit)
        except StorageUnavailable as e:
            raise storage_unavailable(e)
        return [AttendanceOut.model_validate(r) for r in rows]
