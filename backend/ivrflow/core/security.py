"""Password hashing and verification utilities.

Passwords are hashed with bcrypt. The cost factor comes from
settings.BCRYPT_ROUNDS (12 in production; tests lower it for speed).

Logging:
    Hashing and verification are logged at debug level without the
    password or the hash body.
"""

from __future__ import annotations

import bcrypt

from ivrflow.core.config import settings
from ivrflow.core.logging import get_logger

logger = get_logger(__name__)

# Bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _prepare_password(password: str) -> bytes:
    """Encode the password and truncate it to bcrypt's 72-byte limit."""
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        password_bytes = password_bytes[:BCRYPT_MAX_BYTES]
    return password_bytes


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password using bcrypt.

    Each call generates a new salt, so hashing the same password twice
    yields different strings.

    Args:
        password: Plain text password.
        rounds: Cost factor override. Defaults to settings.BCRYPT_ROUNDS.

    Returns:
        Bcrypt hash string (60 characters, ``$2b$`` prefix).

    Examples:
        >>> hashed = hash_password("correct horse")
        >>> hashed.startswith("$2b$")
        True
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(_prepare_password(password), salt).decode("utf-8")

    logger.debug(
        "Password hashed",
        extra={"context": {"action": "hash_password", "hash_prefix": hashed[:7]}},
    )
    return hashed


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a bcrypt hash.

    bcrypt.checkpw compares in constant time. Malformed hashes verify as
    False instead of raising.

    Examples:
        >>> hashed = hash_password("correct horse")
        >>> verify_password("correct horse", hashed)
        True
        >>> verify_password("battery staple", hashed)
        False
    """
    if not hashed_password:
        return False

    try:
        result = bcrypt.checkpw(
            _prepare_password(plain_password), hashed_password.encode("utf-8")
        )
    except ValueError as e:
        logger.warning(
            "Password verification failed on malformed hash",
            extra={
                "context": {
                    "action": "verify_password",
                    "error_type": type(e).__name__,
                }
            },
        )
        return False

    logger.debug(
        "Password verification completed",
        extra={"context": {"action": "verify_password", "result": result}},
    )
    return result


__all__ = [
    "hash_password",
    "verify_password",
]
