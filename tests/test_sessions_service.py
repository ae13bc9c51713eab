from datetime import timedelta

import pytest
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import OperationalError

from api.sessions.sessions_schema import SessionCreate
from api.sessions.sessions_service import SessionService
from helpers.time_helper import ensure_utc
from utils.exceptions import DuplicateSessionId, StorageUnavailable, ValidationError

from tests.conftest import CLASSROOM, T0


def test_create_generates_id_and_defaults(db, settings):
    svc = SessionService(db, settings)
    session = svc.create(
        SessionCreate(label="Chemistry", origin=CLASSROOM),
        issuer_id="teacher-1",
        now=T0,
    )

    assert session.id.startswith("SESSION_")
    assert session.active is True
    assert session.radius_meters is None
    assert session.origin == CLASSROOM
    assert ensure_utc(session.expires_at) - ensure_utc(session.created_at) == timedelta(
        minutes=settings.DEFAULT_SESSION_DURATION_MINUTES
    )


def test_create_with_explicit_expiry(db, settings):
    session = SessionService(db, settings).create(
        SessionCreate(label="Maths", origin=CLASSROOM, expires_at=T0 + timedelta(minutes=45)),
        issuer_id="teacher-1",
        now=T0,
    )
    assert ensure_utc(session.expires_at) == T0 + timedelta(minutes=45)


def test_get_returns_stored_session(make_session, db, settings):
    make_session("SESSION_ABC")
    found = SessionService(db, settings).get("SESSION_ABC")
    assert found is not None
    assert found.label == "Physics 101"
    assert found.issuer_email == "teacher-1@school.test"


@pytest.mark.parametrize("session_id", ["SESSION_999", ""])
def test_get_unknown_is_none(db, settings, session_id):
    assert SessionService(db, settings).get(session_id) is None


def test_duplicate_id_is_rejected(make_session, db, settings):
    make_session("SESSION_DUP")
    with pytest.raises(DuplicateSessionId):
        make_session("SESSION_DUP")


def test_duplicate_id_race_is_caught_by_primary_key(make_session, database, settings, monkeypatch):
    make_session("SESSION_DUP")
    other = database.session()
    # the other writer has not seen the row yet
    monkeypatch.setattr(other, "get", lambda *args, **kwargs: None)
    try:
        with pytest.raises(DuplicateSessionId):
            SessionService(other, settings).create(
                SessionCreate(session_id="SESSION_DUP", label="x", origin=CLASSROOM),
                issuer_id="teacher-2",
                now=T0,
            )
    finally:
        other.close()


def test_expiry_must_follow_creation(db, settings):
    with pytest.raises(ValidationError):
        SessionService(db, settings).create(
            SessionCreate(label="Late", origin=CLASSROOM, expires_at=T0 - timedelta(seconds=1)),
            issuer_id="teacher-1",
            now=T0,
        )


def test_duration_is_capped(db, settings):
    with pytest.raises(ValidationError):
        SessionService(db, settings).create(
            SessionCreate(
                label="Marathon",
                origin=CLASSROOM,
                duration_minutes=settings.MAX_SESSION_DURATION_MINUTES + 1,
            ),
            issuer_id="teacher-1",
            now=T0,
        )


def test_schema_rejects_both_expiry_sources():
    with pytest.raises(SchemaValidationError):
        SessionCreate(label="x", origin=CLASSROOM, expires_at=T0, duration_minutes=5)


def test_schema_rejects_bad_origin():
    with pytest.raises(SchemaValidationError):
        SessionCreate(label="x", origin={"latitude": 120, "longitude": 0})


def test_list_by_issuer_newest_first_with_limit(make_session, db, settings):
    for i in range(4):
        make_session(f"SESSION_{i}", now=T0 + timedelta(minutes=i))
    make_session("SESSION_OTHER", issuer_id="teacher-2")

    rows = SessionService(db, settings).list_by_issuer("teacher-1", limit=3)
    assert [r.id for r in rows] == ["SESSION_3", "SESSION_2", "SESSION_1"]


def test_lookup_failure_surfaces_as_storage_unavailable(db, settings, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection reset"))

    monkeypatch.setattr(db, "get", broken)
    with pytest.raises(StorageUnavailable):
        SessionService(db, settings).get("SESSION_001")
