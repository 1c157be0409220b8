"""User service layer for business logic.

This module provides the service layer for account operations:
registration, credential checks and lookups.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from ivrflow.core.exceptions import InputValidationError
from ivrflow.core.logging import get_logger
from ivrflow.core.security import hash_password, verify_password
from ivrflow.repositories import UserRepository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from ivrflow.models.user import User
    from ivrflow.schemas.user import UserCreate


class UserService:
    """Service layer for user management operations.

    Logging:
        - Logs registrations (never the password)
        - Logs authentication failures for the audit trail
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.users = UserRepository(db)
        self.logger = get_logger(__name__)

    async def register(self, user_data: UserCreate) -> User:
        """Create an account with a bcrypt-hashed password.

        Raises:
            InputValidationError: If the email is already registered.
        """
        if await self.users.get_by_email(user_data.email):
            self.logger.info(
                "Registration rejected: email already in use",
                extra={"context": {"action": "register", "status": "duplicate"}},
            )
            raise InputValidationError("Email already in use")

        user = await self.users.create(
            name=user_data.name,
            email=user_data.email,
            hashed_password=hash_password(user_data.password),
        )

        self.logger.info(
            "User registered",
            extra={"context": {"user_id": str(user.id), "action": "register", "status": "created"}},
        )
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        """Return the user whose credentials match, or None."""
        user = await self.users.get_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            self.logger.warning(
                "Authentication failed",
                extra={"context": {"action": "authenticate", "status": "failed"}},
            )
            return None

        self.logger.info(
            "User authenticated",
            extra={"context": {"user_id": str(user.id), "action": "authenticate"}},
        )
        return user

    async def get(self, user_id: uuid.UUID) -> User | None:
        return await self.users.get(user_id)


__all__ = ["UserService"]
