"""User repository."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

from ivrflow.db.store import RecordStore
from ivrflow.models.user import User
from ivrflow.utils.email import normalize_email

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class UserRepository:
    """Typed finders for users. Emails are compared lower-cased."""

    def __init__(self, db: AsyncSession) -> None:
        self.store: RecordStore[User] = RecordStore(db, User)

    async def get(self, user_id: uuid.UUID) -> User | None:
        return await self.store.find_unique(id=user_id)

    async def get_by_email(self, email: str) -> User | None:
        return await self.store.find_unique(email=normalize_email(email))

    async def create(self, name: str, email: str, hashed_password: str) -> User:
        return await self.store.create(
            name=name,
            email=normalize_email(email),
            hashed_password=hashed_password,
        )

    async def update_profile(self, user_id: uuid.UUID, **fields: Any) -> User | None:
        """Update name, email or hashed_password of a user."""
        if "email" in fields and fields["email"] is not None:
            fields["email"] = normalize_email(fields["email"])
        return await self.store.update({"id": user_id}, fields)


__all__ = ["UserRepository"]
