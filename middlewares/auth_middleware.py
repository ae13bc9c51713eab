from typing import Any, Dict, List

from fastapi import HTTPException, Depends, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import jwt

security = HTTPBearer()


def _roles_from_claims(decoded: Dict[str, Any]) -> List[str]:
    roles = decoded.get("roles")
    if roles is None:
        role = decoded.get("role")
        roles = [role] if role else []
    elif isinstance(roles, str):
        roles = [roles]
    return [str(r) for r in roles]


def auth_middleware(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Dict[str, Any]:
    """
    Decode the identity provider's bearer token into an identity dict.

    The values are trusted as given; nothing is looked up locally.
    """
    settings = request.app.state.settings
    token = credentials.credentials
    try:
        decoded = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = decoded.get("sub") or decoded.get("id")
    if not user_id:
        # token was structurally OK but payload missing
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return {
        "id": str(user_id),
        "email": decoded.get("email"),
        "name": decoded.get("name"),
        "roles": _roles_from_claims(decoded),
    }
