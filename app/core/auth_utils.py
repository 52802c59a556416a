from datetime import datetime, timedelta, timezone

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from app.core.config import settings

ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    if not password_hash or not password:
        return False
    return check_password_hash(password_hash, password)


def create_access_token(account_id, role: str) -> str:
    """Sign a bearer token carrying the account id and role."""
    if not settings.JWT_SECRET:
        raise RuntimeError("JWT_SECRET not defined in environment variables.")

    now = datetime.now(timezone.utc)
    payload = {
        "id": str(account_id),
        "role": role,
        "iat": now,
        "exp": now + timedelta(hours=settings.JWT_EXPIRES_IN_HOURS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    # Raises jwt.PyJWTError on a bad signature, expiry or malformed token
    if not settings.JWT_SECRET:
        raise jwt.InvalidTokenError("JWT_SECRET is not configured")
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGORITHM])
