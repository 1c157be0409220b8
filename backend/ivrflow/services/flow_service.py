"""Flow service layer for business logic.

This module provides:
- Flow CRUD with a seeded start node on creation
- Wholesale node-set replacement with save-invariant validation
- Optimistic concurrency through Flow.version
- Editor operations (connect, disconnect, append, move, delete) that load
  the node set into the flow graph model, mutate it and save it through
  the same replacement path

Every write happens inside the caller's session, so a failure part-way
through any operation rolls back with the request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ivrflow.core.exceptions import VersionConflictError
from ivrflow.core.logging import get_logger
from ivrflow.models.enums import NodeType
from ivrflow.models.flow import generate_node_id
from ivrflow.repositories import FlowRepository, NodeRepository
from ivrflow.services.flow import (
    EdgeNotFoundError,
    FlowGraph,
    FlowNode,
    SequentialFlow,
    new_start_node,
    ordinal_to_position,
    validate_node_set,
)

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from ivrflow.models import Flow, Node, Project
    from ivrflow.schemas.flow import FlowCreate, FlowUpdate, NodeInput
    from ivrflow.services.flow.sequence import Direction

logger = get_logger(__name__)


@dataclass
class FlowSnapshot:
    """A flow row together with its node rows in saved order."""

    flow: Flow
    nodes: list[Node]

    @property
    def version(self) -> int:
        return self.flow.version


def node_from_input(node: NodeInput) -> FlowNode:
    """Convert a submitted node, resolving ordinal positions to coordinates."""
    if isinstance(node.position, int):
        x, y = ordinal_to_position(node.position)
    else:
        x, y = node.position.x, node.position.y

    return FlowNode(
        id=node.id or generate_node_id(),
        node_type=NodeType(node.type),
        title=node.title,
        prompt=node.prompt,
        x=x,
        y=y,
        token_id=node.token_id,
        validation_rules=node.validation_rules,
        next_node_ids=list(node.next_node_ids),
    )


class FlowService:
    """Service for flow management and flow editing."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.flows = FlowRepository(db)
        self.nodes = NodeRepository(db)

    # =========================================================================
    # CRUD
    # =========================================================================

    async def list_for_project(self, project_id: uuid.UUID) -> list[FlowSnapshot]:
        return [await self.snapshot(flow) for flow in await self.flows.list_for_project(project_id)]

    async def snapshot(self, flow: Flow) -> FlowSnapshot:
        return FlowSnapshot(flow=flow, nodes=await self.nodes.list_for_flow(flow.id))

    async def create(self, project: Project, data: FlowCreate) -> FlowSnapshot:
        """Create a flow holding a single start node."""
        flow = await self.flows.create(
            project_id=project.id,
            name=data.name,
            description=data.description,
        )
        nodes = await self.nodes.replace_for_flow(flow.id, [new_start_node().to_row()])

        logger.info(
            "Flow created",
            extra={
                "context": {
                    "flow_id": str(flow.id),
                    "project_id": str(project.id),
                    "action": "create_flow",
                    "status": "created",
                }
            },
        )
        return FlowSnapshot(flow=flow, nodes=nodes)

    async def update(self, flow: Flow, data: FlowUpdate) -> FlowSnapshot:
        """Update name/description and, when sent, replace the node set.

        Raises:
            VersionConflictError: If data.version is set and stale.
            InvalidNodeSetError: If the submitted nodes break a save invariant.
        """
        self.check_version(flow, data.version)

        fields: dict[str, Any] = {}
        if data.name:
            fields["name"] = data.name
        if "description" in data.model_fields_set:
            fields["description"] = data.description

        if data.nodes is None:
            updated = await self.flows.bump_version(flow, **fields)
            return await self.snapshot(updated)

        return await self.save_nodes(
            flow,
            [node_from_input(node) for node in data.nodes],
            **fields,
        )

    async def delete(self, flow: Flow) -> None:
        """Delete a flow and its nodes."""
        await self.nodes.delete_for_flow(flow.id)
        await self.flows.delete(flow.id)
        logger.info(
            "Flow deleted",
            extra={"context": {"flow_id": str(flow.id), "action": "delete_flow"}},
        )

    # =========================================================================
    # Saving
    # =========================================================================

    def check_version(self, flow: Flow, expected: int | None) -> None:
        """Reject the edit when it is based on an outdated version.

        An omitted version means last-write-wins.
        """
        if expected is not None and expected != flow.version:
            logger.info(
                "Flow version conflict",
                extra={
                    "context": {
                        "flow_id": str(flow.id),
                        "expected": expected,
                        "actual": flow.version,
                        "status": "conflict",
                    }
                },
            )
            raise VersionConflictError(expected=expected, actual=flow.version)

    async def save_nodes(
        self,
        flow: Flow,
        nodes: list[FlowNode],
        **fields: Any,
    ) -> FlowSnapshot:
        """Validate ``nodes`` and replace the flow's node set with them.

        The version bump runs first and only succeeds against the version
        ``flow`` was loaded at, so the node rows are never replaced on top
        of a concurrent save.

        Raises:
            InvalidNodeSetError: If ``nodes`` break a save invariant.
            VersionConflictError: If another save committed since ``flow`` was loaded.
        """
        validate_node_set(nodes)

        updated = await self.flows.bump_version(flow, **fields)
        rows = await self.nodes.replace_for_flow(flow.id, [node.to_row() for node in nodes])

        logger.info(
            "Flow node set saved",
            extra={
                "context": {
                    "flow_id": str(flow.id),
                    "node_count": len(rows),
                    "version": updated.version,
                    "action": "save_nodes",
                }
            },
        )
        return FlowSnapshot(flow=updated, nodes=rows)

    # =========================================================================
    # Graph designer
    # =========================================================================

    async def load_graph(self, flow: Flow) -> tuple[FlowSnapshot, FlowGraph]:
        snapshot = await self.snapshot(flow)
        return snapshot, FlowGraph.from_records(snapshot.nodes)

    async def connect(
        self,
        flow: Flow,
        source: str,
        target: str,
        expected_version: int | None = None,
    ) -> FlowSnapshot:
        """Append ``target`` to the successors of ``source`` and save."""
        self.check_version(flow, expected_version)
        _, graph = await self.load_graph(flow)
        graph.connect(source, target)
        return await self.save_nodes(flow, graph.to_nodes())

    async def disconnect(
        self,
        flow: Flow,
        source: str,
        target: str,
        expected_version: int | None = None,
    ) -> FlowSnapshot:
        """Remove one ``source -> target`` connection and save.

        Raises:
            EdgeNotFoundError: If the connection does not exist.
        """
        self.check_version(flow, expected_version)
        _, graph = await self.load_graph(flow)
        if not graph.disconnect(source, target):
            raise EdgeNotFoundError(source, target)
        return await self.save_nodes(flow, graph.to_nodes())

    # =========================================================================
    # Sequential designer
    # =========================================================================

    async def load_sequence(self, flow: Flow) -> tuple[FlowSnapshot, SequentialFlow]:
        snapshot = await self.snapshot(flow)
        return snapshot, SequentialFlow.from_records(snapshot.nodes)

    async def append_node(
        self,
        flow: Flow,
        node_type: NodeType,
        expected_version: int | None = None,
    ) -> FlowSnapshot:
        self.check_version(flow, expected_version)
        _, sequence = await self.load_sequence(flow)
        sequence.add_node(node_type)
        return await self.save_nodes(flow, sequence.to_nodes())

    async def move_node(
        self,
        flow: Flow,
        node_id: str,
        direction: Direction,
        expected_version: int | None = None,
    ) -> tuple[FlowSnapshot, bool]:
        """Move a node one slot. Nothing is saved when the node is at a boundary."""
        self.check_version(flow, expected_version)
        snapshot, sequence = await self.load_sequence(flow)
        if not sequence.move(node_id, direction):
            return snapshot, False
        return await self.save_nodes(flow, sequence.to_nodes()), True

    async def delete_node(
        self,
        flow: Flow,
        node_id: str,
        expected_version: int | None = None,
    ) -> FlowSnapshot:
        """Delete a node, strip references to it and renumber the rest."""
        self.check_version(flow, expected_version)
        _, sequence = await self.load_sequence(flow)
        sequence.delete(node_id)
        return await self.save_nodes(flow, sequence.to_nodes())


__all__ = [
    "FlowService",
    "FlowSnapshot",
    "node_from_input",
]
