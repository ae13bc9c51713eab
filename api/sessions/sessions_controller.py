# api/sessions/sessions_controller.py

from typing import Any, Dict, List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from api.sessions.sessions_service import SessionService
from api.sessions.sessions_schema import SessionCreate, SessionOut
from config.settings import Settings
from utils.exceptions import DuplicateSessionId, StorageUnavailable, ValidationError


def storage_unavailable(exc: StorageUnavailable) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(exc),
        headers={"Retry-After": "1"},
    )


class SessionController:
    @staticmethod
    def create_session(
        payload: SessionCreate,
        db: Session,
        settings: Settings,
        current_user: Dict[str, Any],
    ) -> SessionOut:
        svc = SessionService(db, settings)
        try:
            session = svc.create(
                payload,
                issuer_id=current_user["id"],
                issuer_email=current_user.get("email"),
            )
        except DuplicateSessionId as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        except StorageUnavailable as e:
            raise storage_unavailable(e)
        return SessionOut.model_validate(session)

    @staticmethod
    def get_session(
        session_id: str,
        db: Session,
        settings: Settings,
    ) -> SessionOut:
        try:
            session = SessionService(db, settings).get(session_id)
        except StorageUnavailable as e:
            raise storage_unavailable(e)
        if session is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
        return SessionOut.model_validate(session)

    @staticmethod
    def list_my_sessions(
        db: Session,
        settings: Settings,
        current_user: Dict[str, Any],
        limit: Optional[int] = None,
    ) -> List[SessionOut]:
        try:
            rows = SessionService(db, settings).list_by_issuer(current_user["id"], limit)
        except StorageUnavailable as e:
            raise storage_unavailable(e)
        return [SessionOut.model_validate(r) for r in rows]
