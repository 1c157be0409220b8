"""Flow repository."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

from ivrflow.core.exceptions import ResourceNotFoundError, VersionConflictError
from ivrflow.db.store import RecordStore
from ivrflow.models.flow import Flow

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class FlowRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.store: RecordStore[Flow] = RecordStore(db, Flow)

    async def get(self, flow_id: uuid.UUID) -> Flow | None:
        return await self.store.find_unique(id=flow_id)

    async def list_for_project(self, project_id: uuid.UUID) -> list[Flow]:
        return await self.store.find_many(project_id=project_id)

    async def create(
        self,
        project_id: uuid.UUID,
        name: str,
        description: str | None = None,
    ) -> Flow:
        return await self.store.create(
            project_id=project_id,
            name=name,
            description=description,
            version=1,
        )

    async def update(self, flow_id: uuid.UUID, **fields: Any) -> Flow | None:
        return await self.store.update({"id": flow_id}, fields)

    async def bump_version(self, flow: Flow, **fields: Any) -> Flow:
        """Apply ``fields`` and increment the flow's version.

        The UPDATE only matches while the row is still at the version
        ``flow`` was loaded with, so a writer that committed in between
        makes this call fail instead of being overwritten.

        Raises:
            ResourceNotFoundError: If the flow no longer exists.
            VersionConflictError: If the stored version moved on.
        """
        loaded = flow.version
        matched = await self.store.update_where(
            {"id": flow.id, "version": loaded},
            {**fields, "version": Flow.version + 1},
        )
        current = await self.store.reload(id=flow.id)
        if current is None:
            raise ResourceNotFoundError("Flow", flow.id)
        if not matched:
            raise VersionConflictError(expected=loaded, actual=current.version)
        return current

    async def delete(self, flow_id: uuid.UUID) -> bool:
        return await self.store.delete(id=flow_id)


__all__ = ["FlowRepository"]
