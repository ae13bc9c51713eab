# api/sessions/sessions_routes.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from config.database import get_db
from config.settings import Settings
from middlewares.auth_middleware import auth_middleware
from middlewares.role_middleware import role_middleware
from api.sessions.sessions_controller import SessionController
from api.sessions.sessions_schema import SessionCreate, SessionOut
from utils.deps import get_app_settings

router = APIRouter(prefix="/attendance/sessions", tags=["sessions"])


@router.post(
    "",
    response_model=SessionOut,
    status_code=status.HTTP_201_CREATED,
    summary="Open an attendance session (issuer)",
)
def create_session(
    payload: SessionCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: dict = Depends(role_middleware(["teacher"])),
) -> SessionOut:
    return SessionController.create_session(payload, db, settings, current_user)


@router.get(
    "",
    response_model=List[SessionOut],
    summary="List my sessions, newest first (issuer)",
)
def list_my_sessions(
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: dict = Depends(role_middleware(["teacher"])),
) -> List[SessionOut]:
    return SessionController.list_my_sessions(db, settings, current_user, limit)


@router.get(
    "/{session_id}",
    response_model=SessionOut,
    summary="Fetch session details",
)
def get_session(
    session_id: str,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: dict = Depends(auth_middleware),
) -> SessionOut:
    return SessionController.get_session(session_id, db, settings)
