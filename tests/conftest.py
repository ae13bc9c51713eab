import os
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from api.geo.geo_schema import Coordinate
from api.sessions.sessions_schema import SessionCreate
from api.sessions.sessions_service import SessionService
from config.database import Database
from config.settings import Settings
from helpers.token_helper import create_identity_token

TEST_JWT_SECRET = "test-signing-secret-for-the-attendance-suite"

# main builds an app from the environment at import time
os.environ.setdefault("JWT_SECRET", TEST_JWT_SECRET)

CLASSROOM = Coordinate(latitude=18.516726, longitude=73.856255)
T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        AUTO_CREATE_TABLES=True,
        JWT_SECRET=TEST_JWT_SECRET,
    )


@pytest.fixture
def database(settings):
    database = Database.from_settings(settings)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def make_session(db, settings):
    """Create a session through the registry, created at T0 unless told otherwise."""

    def _make(session_id="SESSION_001", radius_meters=50, origin=CLASSROOM, now=T0,
              duration_minutes=15, issuer_id="teacher-1", label="Physics 101"):
        return SessionService(db, settings).create(
            SessionCreate(
                session_id=session_id,
                label=label,
                origin=origin,
                radius_meters=radius_meters,
                duration_minutes=duration_minutes,
            ),
            issuer_id=issuer_id,
            issuer_email=f"{issuer_id}@school.test",
            now=now,
        )

    return _make


@pytest.fixture
def clock():
    """Mutable clock for the orchestrator: set ``clock.now`` to move time."""

    class _Clock:
        now = T0 + timedelta(minutes=1)

        def __call__(self):
            return self.now

    return _Clock()


@pytest.fixture
def client(settings):
    from main import create_app

    app = create_app(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers(settings):
    def _headers(user_id, roles=None, email=None):
        token = create_identity_token(
            user_id,
            email=email or f"{user_id}@school.test",
            roles=roles or [],
            settings=settings,
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers
