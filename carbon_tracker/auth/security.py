"""
Password hashing and session tokens.

Passwords are hashed with bcrypt; sessions are HS256 JWTs that carry the
user's identity and onboarding flag so route gating can decide without a
database lookup.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt
from fastapi import Request

from carbon_tracker.config.settings import settings
from carbon_tracker.models.dtos import SessionDTO
from carbon_tracker.models.user_orm import UserORM

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class SessionTokenError(Exception):
    """Raised when a session token is missing, malformed, or expired."""


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a plain-text password with bcrypt.

    Args:
        password: Plain-text password
        rounds: bcrypt cost factor, defaults to settings.PASSWORD_HASH_ROUNDS

    Returns:
        str: The encoded bcrypt hash
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.PASSWORD_HASH_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plain-text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def create_session_token(user: UserORM, now: Optional[datetime] = None) -> str:
    """
    Issue a signed session token for a user.

    Args:
        user: The authenticated user
        now: Issue time, defaults to the current UTC time

    Returns:
        str: Encoded JWT
    """
    issued_at = now or datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": user.id,
        "email": user.email,
        "name": user.name,
        "onboardingCompleted": bool(user.onboarding_completed),
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + timedelta(minutes=settings.SESSION_TTL_MINUTES)).timestamp()),
    }
    return jwt.encode(payload, settings.SESSION_SECRET_KEY, algorithm=settings.SESSION_ALGORITHM)


def decode_session_token(token: str) -> SessionDTO:
    """
    Verify and decode a session token.

    Args:
        token: Encoded JWT

    Returns:
        SessionDTO: Identity and flags carried by the token

    Raises:
        SessionTokenError: If the token is expired or invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.SESSION_SECRET_KEY,
            algorithms=[settings.SESSION_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise SessionTokenError("Session token expired") from e
    except jwt.InvalidTokenError as e:
        raise SessionTokenError(f"Invalid session token: {e}") from e

    return SessionDTO(
        user_id=payload["sub"],
        email=payload.get("email", ""),
        name=payload.get("name"),
        onboarding_completed=bool(payload.get("onboardingCompleted", False)),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def extract_session_token(request: Request) -> Optional[str]:
    """
    Read the session token from the session cookie or an `Authorization: Bearer` header.
    """
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        return token

    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None
