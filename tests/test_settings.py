import pytest
from pydantic import ValidationError

from config.settings import Settings


def test_jwt_secret_has_no_default(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, ENVIRONMENT="production", CORS_ORIGINS="https://school.test")


def test_short_jwt_secret_is_rejected(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, JWT_SECRET="short")


def test_jwt_secret_read_from_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "x" * 40)
    assert Settings(_env_file=None).JWT_SECRET == "x" * 40


def test_unsupported_database_url_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, JWT_SECRET="x" * 40, DATABASE_URL="mysql://db/attendance")
