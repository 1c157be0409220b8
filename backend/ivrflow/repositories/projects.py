"""Project repository."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

from ivrflow.db.store import RecordStore
from ivrflow.models.project import Project

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class ProjectRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.store: RecordStore[Project] = RecordStore(db, Project)

    async def get(self, project_id: uuid.UUID) -> Project | None:
        return await self.store.find_unique(id=project_id)

    async def list_for_owner(self, user_id: uuid.UUID) -> list[Project]:
        return await self.store.find_many(user_id=user_id)

    async def create(
        self,
        user_id: uuid.UUID,
        name: str,
        description: str | None = None,
    ) -> Project:
        return await self.store.create(user_id=user_id, name=name, description=description)

    async def update(self, project_id: uuid.UUID, **fields: Any) -> Project | None:
        return await self.store.update({"id": project_id}, fields)

    async def delete(self, project_id: uuid.UUID) -> bool:
        return await self.store.delete(id=project_id)


__all__ = ["ProjectRepository"]
