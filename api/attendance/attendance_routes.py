# api/attendance/attendance_routes.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from config.database import get_db
from config.settings import Settings
from middlewares.auth_middleware import auth_middleware
from middlewares.role_middleware import role_middleware
from api.attendance.attendance_schema import AttendanceOut, MarkAttendanceIn, VerificationOutcome
from api.attendance.attendance_controller import AttendanceController
from utils.deps import get_app_settings

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.post(
    "/mark",
    response_model=VerificationOutcome,
    summary="Claimant marks attendance by presenting a session id and position",
)
def mark_attendance(
    payload: MarkAttendanceIn,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: dict = Depends(auth_middleware),
) -> VerificationOutcome:
    return AttendanceController.mark(payload, response, db, settings, current_user)


@router.get(
    "/sessions/{session_id}/records",
    response_model=List[AttendanceOut],
    summary="List attendance for a session, newest first (issuer only)",
)
def list_session_records(
    session_id: str,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: dict = Depends(role_middleware(["teacher"])),
) -> List[AttendanceOut]:
    return AttendanceController.list_session_records(session_id, db, settings, current_user, limit)


@router.get(
    "/users/me/records",
    response_model=List[AttendanceOut],
    summary="List my own attendance records",
)
def list_my_records(
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: dict = Depends(auth_middleware),
) -> List[AttendanceOut]:
    return AttendanceController.list_my_records(db, settings, current_user, limit)
