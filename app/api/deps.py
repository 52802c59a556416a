"""
API dependencies (bearer token verification and role checks).

Provides FastAPI dependencies that verify the signed bearer tokens issued
at register/login.
"""

from typing import Callable, List, Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.auth_utils import decode_access_token

# auto_error is off so a missing header is answered with our own 401
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
):
    """
    Verify the bearer token from the Authorization header.

    Expects:
        Authorization: Bearer <token>
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Not authorized, no token")

    try:
        decoded = decode_access_token(credentials.credentials)
    except jwt.PyJWTError as exc:
        raise HTTPException(
            status_code=401,
            detail="Not authorized, token failed",
        ) from exc

    if not decoded.get("id") or not decoded.get("role"):
        raise HTTPException(status_code=401, detail="Not authorized, token failed")

    return {"id": decoded["id"], "role": decoded["role"]}


def require_role(allowed: List[str], detail: str = "Insufficient permissions") -> Callable:
    """
    Return a FastAPI dependency that enforces a user's role.

    The token carries a single `role` claim, e.g. {'role': 'patient'}.
    """

    def _checker(user=Depends(get_current_user)):
        if user.get("role") not in allowed:
            raise HTTPException(
                status_code=403,
                detail=detail,
            )

        return user

    return _checker
