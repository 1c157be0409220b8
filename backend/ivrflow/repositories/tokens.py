"""Token repository."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

from ivrflow.db.store import RecordStore
from ivrflow.models.token import Token

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from ivrflow.models.enums import TokenType


class TokenRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.store: RecordStore[Token] = RecordStore(db, Token)

    async def get(self, token_id: uuid.UUID) -> Token | None:
        return await self.store.find_unique(id=token_id)

    async def list_for_project(self, project_id: uuid.UUID) -> list[Token]:
        return await self.store.find_many(project_id=project_id)

    async def list_for_projects(self, project_ids: Sequence[uuid.UUID]) -> list[Token]:
        return await self.store.find_in("project_id", project_ids)

    async def create(
        self,
        project_id: uuid.UUID,
        name: str,
        token_type: TokenType,
        description: str | None = None,
        format: str | None = None,  # noqa: A002 - column name
    ) -> Token:
        return await self.store.create(
            project_id=project_id,
            name=name,
            token_type=token_type,
            description=description,
            format=format,
        )

    async def update(self, token_id: uuid.UUID, **fields: Any) -> Token | None:
        return await self.store.update({"id": token_id}, fields)

    async def delete(self, token_id: uuid.UUID) -> bool:
        return await self.store.delete(id=token_id)

    async def delete_for_project(self, project_id: uuid.UUID) -> bool:
        return await self.store.delete(project_id=project_id)


__all__ = ["TokenRepository"]
