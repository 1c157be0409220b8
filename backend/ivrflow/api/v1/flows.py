"""Flow API Router.

This module provides REST API endpoints for flows and for the two flow
editors:

- CRUD on flows; PUT with ``nodes`` replaces the whole node set
- graph designer: read the graph, add or remove connections
- sequential designer: read the sequence, append, move and delete nodes

Every editor mutation is a load -> mutate -> save cycle that goes through
the same node-set replacement as PUT /flows/{id}. Each mutation accepts an
optional ``version``; a stale one answers 409.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from ivrflow.api.deps import (  # noqa: TC001 - Required at runtime for FastAPI
    Access,
    CurrentUser,
    DBSession,
)
from ivrflow.schemas.base import MessageResponse
from ivrflow.schemas.flow import (
    ConnectionRequest,
    EdgeResponse,
    FlowCreate,
    FlowCreatedEnvelope,
    FlowEnvelope,
    FlowListEnvelope,
    FlowResponse,
    FlowUpdate,
    GraphResponse,
    MoveRequest,
    NodeEnvelope,
    NodeResponse,
    SequenceNodeCreate,
    SequenceNodeResponse,
    SequenceResponse,
)
from ivrflow.services.access import ResourceKind
from ivrflow.services.flow import FlowGraph, FlowNode, ordinals
from ivrflow.services.flow_service import FlowService, FlowSnapshot

router = APIRouter()


# =============================================================================
# Response builders
# =============================================================================


def graph_response(snapshot: FlowSnapshot) -> GraphResponse:
    graph = FlowGraph.from_records(snapshot.nodes)
    return GraphResponse(
        flow_id=snapshot.flow.id,
        version=snapshot.version,
        nodes=[NodeResponse.model_validate(node) for node in snapshot.nodes],
        edges=[
            EdgeResponse(id=edge.id, source=edge.source, target=edge.target, label=edge.label)
            for edge in graph.edges()
        ],
    )


def sequence_response(snapshot: FlowSnapshot, moved: bool | None = None) -> SequenceResponse:
    order = ordinals([FlowNode.from_record(node) for node in snapshot.nodes])
    records = sorted(snapshot.nodes, key=lambda node: order[node.id])
    return SequenceResponse(
        flow_id=snapshot.flow.id,
        version=snapshot.version,
        nodes=[
            SequenceNodeResponse(
                **NodeResponse.model_validate(node).model_dump(),
                order=order[node.id],
            )
            for node in records
        ],
        moved=moved,
    )


# =============================================================================
# Flow Endpoints
# =============================================================================


@router.get(
    "",
    response_model=FlowListEnvelope,
    summary="List flows of a project",
    description="Flows of the given project, each with its nodes.",
)
async def list_flows(
    project_id: Annotated[UUID, Query(alias="projectId")],
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> FlowListEnvelope:
    target = await access.authorize(current_user, ResourceKind.PROJECT, project_id)
    snapshots = await FlowService(db).list_for_project(target.project.id)
    return FlowListEnvelope(flows=[FlowResponse.from_flow(s.flow, s.nodes) for s in snapshots])


@router.post(
    "",
    response_model=FlowCreatedEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a flow",
    description="Create a flow seeded with a single start node.",
)
async def create_flow(
    data: FlowCreate,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> FlowCreatedEnvelope:
    target = await access.authorize(current_user, ResourceKind.PROJECT, data.project_id)
    snapshot = await FlowService(db).create(target.project, data)
    return FlowCreatedEnvelope(
        message="Flow created successfully",
        flow=FlowResponse.from_flow(snapshot.flow, snapshot.nodes),
    )


@router.get("/{flow_id}", response_model=FlowEnvelope, summary="Get a flow")
async def get_flow(
    flow_id: UUID,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> FlowEnvelope:
    target = await access.authorize(current_user, ResourceKind.FLOW, flow_id)
    snapshot = await FlowService(db).snapshot(target.resource)
    return FlowEnvelope(flow=FlowResponse.from_flow(snapshot.flow, snapshot.nodes))


@router.put(
    "/{flow_id}",
    response_model=FlowEnvelope,
    summary="Update a flow",
    description=(
        "Update name and description. When nodes is sent it replaces the "
        "flow's entire node set; the set must hold exactly one start node, "
        "unique ids and only references to its own nodes."
    ),
)
async def update_flow(
    flow_id: UUID,
    data: FlowUpdate,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> FlowEnvelope:
    target = await access.authorize(current_user, ResourceKind.FLOW, flow_id)
    snapshot = await FlowService(db).update(target.resource, data)
    return FlowEnvelope(flow=FlowResponse.from_flow(snapshot.flow, snapshot.nodes))


@router.delete("/{flow_id}", response_model=MessageResponse, summary="Delete a flow")
async def delete_flow(
    flow_id: UUID,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> MessageResponse:
    target = await access.authorize(current_user, ResourceKind.FLOW, flow_id)
    await FlowService(db).delete(target.resource)
    return MessageResponse(message="Flow deleted successfully")


# =============================================================================
# Graph Designer Endpoints
# =============================================================================


@router.get("/{flow_id}/graph", response_model=GraphResponse, summary="Flow graph")
async def get_graph(
    flow_id: UUID,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> GraphResponse:
    target = await access.authorize(current_user, ResourceKind.FLOW, flow_id)
    snapshot = await FlowService(db).snapshot(target.resource)
    return graph_response(snapshot)


@router.post(
    "/{flow_id}/connections",
    response_model=GraphResponse,
    summary="Connect two nodes",
    description="Append target to source's nextNodeIds. Repeated connections are kept.",
)
async def add_connection(
    flow_id: UUID,
    data: ConnectionRequest,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> GraphResponse:
    target = await access.authorize(current_user, ResourceKind.FLOW, flow_id)
    snapshot = await FlowService(db).connect(
        target.resource, data.source, data.target, data.version
    )
    return graph_response(snapshot)


@router.delete(
    "/{flow_id}/connections",
    response_model=GraphResponse,
    summary="Disconnect two nodes",
)
async def remove_connection(
    flow_id: UUID,
    data: ConnectionRequest,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> GraphResponse:
    target = await access.authorize(current_user, ResourceKind.FLOW, flow_id)
    snapshot = await FlowService(db).disconnect(
        target.resource, data.source, data.target, data.version
    )
    return graph_response(snapshot)


# =============================================================================
# Sequential Designer Endpoints
# =============================================================================


@router.get("/{flow_id}/sequence", response_model=SequenceResponse, summary="Flow sequence")
async def get_sequence(
    flow_id: UUID,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> SequenceResponse:
    target = await access.authorize(current_user, ResourceKind.FLOW, flow_id)
    snapshot = await FlowService(db).snapshot(target.resource)
    return sequence_response(snapshot)


@router.post(
    "/{flow_id}/sequence",
    response_model=SequenceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Append a node",
    description='Append a node titled "New <type>" at the end of the sequence.',
)
async def append_sequence_node(
    flow_id: UUID,
    data: SequenceNodeCreate,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> SequenceResponse:
    target = await access.authorize(current_user, ResourceKind.FLOW, flow_id)
    snapshot = await FlowService(db).append_node(target.resource, data.type, data.version)
    return sequence_response(snapshot)


@router.post(
    "/{flow_id}/sequence/{node_id}/move",
    response_model=SequenceResponse,
    summary="Move a node up or down",
    description="moved is false when the node is already at a boundary.",
)
async def move_sequence_node(
    flow_id: UUID,
    node_id: str,
    data: MoveRequest,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> SequenceResponse:
    target = await access.authorize(current_user, ResourceKind.NODE, node_id, flow_id=flow_id)
    snapshot, moved = await FlowService(db).move_node(
        target.flow, node_id, data.direction, data.version
    )
    return sequence_response(snapshot, moved=moved)


# =============================================================================
# Node Endpoints
# =============================================================================


@router.get("/{flow_id}/nodes/{node_id}", response_model=NodeEnvelope, summary="Get a node")
async def get_node(
    flow_id: UUID,
    node_id: str,
    access: Access,
    current_user: CurrentUser,
) -> NodeEnvelope:
    target = await access.authorize(current_user, ResourceKind.NODE, node_id, flow_id=flow_id)
    return NodeEnvelope(node=NodeResponse.model_validate(target.resource))


@router.delete(
    "/{flow_id}/nodes/{node_id}",
    response_model=SequenceResponse,
    summary="Delete a node",
    description="Remove the node and every connection to it. The start node cannot be deleted.",
)
async def delete_node(
    flow_id: UUID,
    node_id: str,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
    version: Annotated[int | None, Query(ge=1)] = None,
) -> SequenceResponse:
    target = await access.authorize(current_user, ResourceKind.NODE, node_id, flow_id=flow_id)
    snapshot = await FlowService(db).delete_node(target.flow, node_id, version)
    return sequence_response(snapshot)
