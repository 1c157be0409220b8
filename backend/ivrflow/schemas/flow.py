"""Pydantic schemas for Flow, Node and flow-editor operations.

Node positions are always returned as ``{x, y}``. On input a node may
instead carry an integer ordinal (its slot in the sequential editor); the
flow service converts ordinals to coordinates before anything is stored.
"""

from __future__ import annotations

from typing import Any, Literal
from uuid import UUID  # noqa: TC003 - Required at runtime for Pydantic

from pydantic import AliasChoices, Field, NonNegativeInt

from ivrflow.models.enums import NodeType
from ivrflow.schemas.base import (
    BaseResponse,
    BaseSchema,
    DescriptionField,
    ExpectedVersionField,
    NameField,
    OptionalNameField,
)

# =============================================================================
# Node schemas
# =============================================================================


class Position(BaseSchema):
    """Canvas coordinate of a node."""

    x: float = Field(..., examples=[250])
    y: float = Field(..., examples=[100])


class NodeInput(BaseSchema):
    """Node as submitted in a full node-set save.

    ``id`` may be omitted for new nodes; one is generated on save.
    """

    id: str | None = Field(default=None, max_length=64)
    type: NodeType
    title: str = Field(default="", max_length=255)
    prompt: str | None = None
    position: Position | NonNegativeInt = Field(
        default_factory=lambda: Position(x=0, y=0),
        description="Coordinate object, or an integer ordinal",
    )
    token_id: str | None = Field(default=None, max_length=64)
    validation_rules: Any | None = None
    next_node_ids: list[str] = Field(default_factory=list)


class NodeResponse(BaseSchema):
    """Persisted node."""

    id: str
    type: NodeType = Field(validation_alias=AliasChoices("type", "node_type"))
    title: str
    prompt: str | None = None
    position: Position
    token_id: str | None = None
    validation_rules: Any | None = None
    next_node_ids: list[str] = Field(default_factory=list)
    flow_id: UUID


class SequenceNodeResponse(NodeResponse):
    """Node annotated with its ordinal in the sequential editor."""

    order: int = Field(..., ge=0)


class NodeEnvelope(BaseSchema):
    node: NodeResponse


# =============================================================================
# Flow schemas
# =============================================================================


class FlowCreate(BaseSchema):
    """Schema for creating a flow. A start node is seeded automatically."""

    name: str = NameField
    description: str | None = DescriptionField
    project_id: UUID


class FlowUpdate(BaseSchema):
    """Schema for updating a flow.

    When ``nodes`` is present it replaces the flow's entire node set.
    """

    name: str | None = OptionalNameField
    description: str | None = DescriptionField
    nodes: list[NodeInput] | None = None
    version: int | None = ExpectedVersionField


class FlowSummary(BaseSchema):
    """Flow reference embedded in project listings."""

    id: UUID
    name: str


class FlowResponse(BaseResponse):
    """Flow with its nodes."""

    name: str
    description: str | None = None
    project_id: UUID
    version: int
    nodes: list[NodeResponse] = Field(default_factory=list)

    @classmethod
    def from_flow(cls, flow: Any, nodes: list[Any]) -> FlowResponse:
        """Build a response from a Flow row and its Node rows."""
        response = cls.model_validate(flow)
        response.nodes = [NodeResponse.model_validate(node) for node in nodes]
        return response


class FlowEnvelope(BaseSchema):
    flow: FlowResponse


class FlowCreatedEnvelope(BaseSchema):
    message: str
    flow: FlowResponse


class FlowListEnvelope(BaseSchema):
    flows: list[FlowResponse]


# =============================================================================
# Editor schemas
# =============================================================================


class EdgeResponse(BaseSchema):
    """Directed edge derived from a node's next_node_ids entry."""

    id: str
    source: str
    target: str
    label: str | None = None


class GraphResponse(BaseSchema):
    """Graph-designer view of a flow."""

    flow_id: UUID
    version: int
    nodes: list[NodeResponse]
    edges: list[EdgeResponse]


class SequenceResponse(BaseSchema):
    """Sequential-designer view of a flow, start node first."""

    flow_id: UUID
    version: int
    nodes: list[SequenceNodeResponse]
    moved: bool | None = Field(
        default=None,
        description="Set by move requests; false when the node was at a boundary",
    )


class ConnectionRequest(BaseSchema):
    """Add or remove the edge source -> target."""

    source: str = Field(..., min_length=1)
    target: str = Field(..., min_length=1)
    version: int | None = ExpectedVersionField


class SequenceNodeCreate(BaseSchema):
    """Append a node of the given type to the sequence."""

    type: NodeType
    version: int | None = ExpectedVersionField


class MoveRequest(BaseSchema):
    direction: Literal["up", "down"]
    version: int | None = ExpectedVersionField


__all__ = [
    "ConnectionRequest",
    "EdgeResponse",
    "FlowCreate",
    "FlowCreatedEnvelope",
    "FlowEnvelope",
    "FlowListEnvelope",
    "FlowResponse",
    "FlowSummary",
    "FlowUpdate",
    "GraphResponse",
    "MoveRequest",
    "NodeEnvelope",
    "NodeInput",
    "NodeResponse",
    "Position",
    "SequenceNodeCreate",
    "SequenceNodeResponse",
    "SequenceResponse",
]
