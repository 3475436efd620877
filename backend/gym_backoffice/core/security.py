"""
Password hashing and bearer tokens for back office admins.

Passwords are bcrypt hashes (passlib). Tokens are HS256 JWTs whose ``sub``
is the admin's primary key and ``adminId`` their login name.
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from gym_backoffice.core.config import is_production

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

JWT_ALGORITHM = "HS256"
DEFAULT_TOKEN_DAYS = 7
WEAK_SECRETS = ("dev-jwt-secret-change-me", "dev-secret-change-me", "secret123")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """False for a wrong password and for an empty or malformed stored hash."""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def get_jwt_secret_key() -> str:
    """JWT_SECRET_KEY, refusing weak or short values in production.

    Raises:
        ValueError: production with a default, listed or < 32 char secret
    """
    secret = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-change-me")
    if is_production() and (secret in WEAK_SECRETS or len(secret) < 32):
        raise ValueError(
            "Production deployment requires strong JWT_SECRET_KEY (min 32 chars)."
        )
    return secret


def get_jwt_expiration() -> timedelta:
    """Token lifetime from JWT_EXPIRATION_DAYS."""
    try:
        days = int(os.getenv("JWT_EXPIRATION_DAYS", str(DEFAULT_TOKEN_DAYS)))
    except ValueError:
        days = DEFAULT_TOKEN_DAYS
    return timedelta(days=days)


def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    claims = dict(data)
    claims["exp"] = datetime.now(timezone.utc) + (expires_delta or get_jwt_expiration())
    return jwt.encode(claims, get_jwt_secret_key(), algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Claims of a valid token; None when the signature or expiry check fails."""
    try:
        return jwt.decode(token, get_jwt_secret_key(), algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None


def create_admin_token(admin_pk: int, admin_login: str) -> str:
    return create_access_token(
        {"sub": str(admin_pk), "adminId": admin_login, "type": "access"}
    )


def get_admin_from_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Returns:
        ``{"id": int, "admin_id": str}`` for a valid admin token, else None
    """
    claims = decode_access_token(token)
    if claims is None:
        return None

    subject = claims.get("sub")
    admin_login = claims.get("adminId")
    if subject is None or admin_login is None:
        return None

    try:
        return {"id": int(subject), "admin_id": admin_login}
    except (TypeError, ValueError):
        return None
