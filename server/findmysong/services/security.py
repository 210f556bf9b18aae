"""Password hashing (bcrypt) and session tokens (PyJWT)."""

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt

from findmysong.config import settings

_BCRYPT_ROUNDS = 10
# bcrypt ignores everything after 72 bytes
MAX_PASSWORD_BYTES = 72


class InvalidTokenError(Exception):
    """The session token is missing, malformed, expired or badly signed."""


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=_BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password_hash: str, password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(user_id: int, email: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expire_days)
    claims = {"id": user_id, "email": email, "exp": expire}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError as e:
        raise InvalidTokenError(str(e)) from e
    if not isinstance(claims.get("id"), int):
        raise InvalidTokenError("Token has no user id")
    return claims
