import jwt
import datetime
from typing import Any, Dict, List, Optional

from config.settings import Settings, get_settings


def create_access_token(
    payload: Dict[str, Any],
    expires_minutes: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> str:
    """
    Generate a JWT access token with the given payload and expiration.
    """
    settings = settings or get_settings()
    minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    expire = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(minutes=minutes)
    to_encode = payload.copy()
    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.ALGORITHM)


def create_identity_token(
    user_id: str,
    email: Optional[str] = None,
    roles: Optional[List[str]] = None,
    expires_minutes: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> str:
    """
    Mint a token shaped like the identity provider's:
      - sub
      - email
      - roles (as a list of strings)
      - exp (handled by create_access_token)

    Used by local development tooling and the test suite.
    """
    payload: Dict[str, Any] = {"sub": user_id, "roles": roles or []}
    if email:
        payload["email"] = email
    return create_access_token(payload, expires_minutes=expires_minutes, settings=settings)
