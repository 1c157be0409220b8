"""JWT token creation and validation utilities.

Access tokens are the session mechanism of the API: the subject claim holds
the user id, and every authenticated request presents the token as
``Authorization: Bearer <token>``. Uses python-jose for JWT operations.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from ivrflow.core.config import settings


def create_access_token(
    subject: str | Any,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token.

    Args:
        subject: Subject of the token (the user id).
        expires_delta: Optional custom lifetime. Defaults to
            settings.ACCESS_TOKEN_EXPIRE_MINUTES.

    Returns:
        Encoded JWT token string.

    Examples:
        >>> token = create_access_token("user-123")
        >>> isinstance(token, str)
        True
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(UTC) + expires_delta

    to_encode = {"exp": expire, "sub": str(subject)}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a JWT access token.

    Returns:
        Decoded payload if the token is valid and unexpired, None otherwise.
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        # Covers expired signatures as well as malformed tokens
        return None


def verify_token(token: str) -> str | None:
    """Verify a JWT token and return its subject.

    Examples:
        >>> verify_token(create_access_token("user-123"))
        'user-123'
        >>> verify_token("invalid-token") is None
        True
    """
    payload = decode_access_token(token)
    if payload is None:
        return None
    return payload.get("sub")


__all__ = [
    "create_access_token",
    "decode_access_token",
    "verify_token",
]
