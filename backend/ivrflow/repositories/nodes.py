"""Node repository.

Nodes are always read in saved order and written as a whole set: the
editors submit the complete node list of a flow, which replaces the
stored one.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from ivrflow.db.store import RecordStore
from ivrflow.models.flow import Node

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class NodeRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.store: RecordStore[Node] = RecordStore(db, Node)

    async def get(self, flow_id: uuid.UUID, node_id: str) -> Node | None:
        return await self.store.find_unique(flow_id=flow_id, id=node_id)

    async def list_for_flow(self, flow_id: uuid.UUID) -> list[Node]:
        return await self.store.find_many(order_by=["sort_order"], flow_id=flow_id)

    async def create(self, flow_id: uuid.UUID, **fields: Any) -> Node:
        return await self.store.create(flow_id=flow_id, **fields)

    async def replace_for_flow(
        self,
        flow_id: uuid.UUID,
        rows: Sequence[Mapping[str, Any]],
    ) -> list[Node]:
        """Delete every node of the flow, then insert ``rows`` in order."""
        await self.store.delete(flow_id=flow_id)
        return await self.store.create_many(
            [
                {**row, "flow_id": flow_id, "sort_order": index}
                for index, row in enumerate(rows)
            ]
        )

    async def delete_for_flow(self, flow_id: uuid.UUID) -> bool:
        return await self.store.delete(flow_id=flow_id)


__all__ = ["NodeRepository"]
