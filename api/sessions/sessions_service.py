# api/sessions/sessions_service.py

import logging
import uuid
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from api.sessions.sessions_model import AttendanceSession
from api.sessions.sessions_schema import SessionCreate
from config.settings import Settings, get_settings
from helpers.time_helper import ensure_utc, now_utc
from utils.database_utils import DatabaseUtils
from utils.exceptions import DuplicateSessionId, ValidationError

logger = logging.getLogger(__name__)


def generate_session_id() -> str:
    return f"SESSION_{uuid.uuid4().hex[:12].upper()}"


class SessionService:
    """Session registry: creates and looks up attendance windows."""

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()

    def create(
        self,
        data: SessionCreate,
        issuer_id: str,
        issuer_email: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> AttendanceSession:
        created_at = ensure_utc(now) if now else now_utc()

        if data.expires_at is not None:
            expires_at = ensure_utc(data.expires_at)
        else:
            minutes = data.duration_minutes or self.settings.DEFAULT_SESSION_DURATION_MINUTES
            expires_at = created_at + timedelta(minutes=minutes)

        if expires_at <= created_at:
            raise ValidationError("Session must expire after it is created")
        if expires_at - created_at > timedelta(minutes=self.settings.MAX_SESSION_DURATION_MINUTES):
            raise ValidationError(
                f"Session may last at most {self.settings.MAX_SESSION_DURATION_MINUTES} minutes"
            )

        session = AttendanceSession(
            id=data.session_id or generate_session_id(),
            issuer_id=issuer_id,
            issuer_email=issuer_email,
            label=data.label,
            origin=data.origin,
            radius_meters=data.radius_meters,
            created_at=created_at,
            expires_at=expires_at,
        )

        with DatabaseUtils.storage_guard(self.db, "creating session"):
            if self.db.get(AttendanceSession, session.id) is not None:
                raise DuplicateSessionId(session.id)
            self.db.add(session)
            try:
                self.db.commit()
            except IntegrityError as exc:
                self.db.rollback()
                raise DuplicateSessionId(session.id) from exc
            self.db.refresh(session)

        logger.info(f"Session {session.id} created by {issuer_id}, expires {expires_at.isoformat()}")
        return session

    def get(self, session_id: str) -> Optional[AttendanceSession]:
        if not session_id:
            return None
        with DatabaseUtils.storage_guard(self.db, "looking up session"):
            return self.db.get(AttendanceSession, session_id)

    def list_by_issuer(self, issuer_id: str, limit: Optional[int] = None) -> List[AttendanceSession]:
        limit = limit or self.settings.SESSION_LIST_LIMIT
        with DatabaseUtils.storage_guard(self.db, "listing sessions"):
            return (
                self.db.query(AttendanceSession)
                    .filter_by(issuer_id=issuer_id)
                    .order_by(AttendanceSession.created_at.desc())
                    .limit(limit)
                    .all()
            )
