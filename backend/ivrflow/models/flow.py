"""Flow and Node models.

A Flow is an IVR authentication dialogue. Its Nodes form a directed graph
through each node's ordered ``next_node_ids`` list; there is no separate
edge table.

Node ids are opaque strings chosen by the editor (or generated here) and
are unique within their flow, so the primary key is (flow_id, id).
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ivrflow.models.base import GUID, Base, JSONType, TimestampMixin, UUIDMixin
from ivrflow.models.enums import NodeType


def generate_node_id() -> str:
    """Return a new opaque node id."""
    return uuid.uuid4().hex


class Flow(UUIDMixin, TimestampMixin, Base):
    """Authentication flow belonging to a project.

    Attributes:
        name: Flow name, e.g. "Login"
        description: Optional description
        project_id: Owning project
        version: Optimistic concurrency counter, bumped on every save
    """

    __tablename__ = "flows"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    project_id: Mapped[uuid.UUID] = mapped_column(
        GUID(),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        server_default="1",
    )

    def __repr__(self) -> str:
        return f"<Flow(id={self.id}, name='{self.name}', version={self.version})>"


class Node(TimestampMixin, Base):
    """Single step of a flow.

    Attributes:
        flow_id: Owning flow (part of the primary key)
        id: Opaque node id, unique within the flow
        node_type: Node classification
        title: Display title
        prompt: What the IVR says at this step
        position_x: Canvas x coordinate
        position_y: Canvas y coordinate
        token_id: Soft reference to a Token; never checked or cascaded
        validation_rules: Opaque JSON rules for collect/validate nodes
        next_node_ids: Ordered successor ids; duplicates allowed
        sort_order: Position of the node in the saved node list
    """

    __tablename__ = "nodes"

    flow_id: Mapped[uuid.UUID] = mapped_column(
        GUID(),
        ForeignKey("flows.id", ondelete="CASCADE"),
        primary_key=True,
    )

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=generate_node_id,
    )

    node_type: Mapped[NodeType] = mapped_column(
        "type",
        Enum(
            NodeType,
            name="node_type",
            native_enum=False,
            length=16,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    prompt: Mapped[str | None] = mapped_column(Text, nullable=True)

    position_x: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    position_y: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    token_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    validation_rules: Mapped[Any | None] = mapped_column(JSONType, nullable=True)

    next_node_ids: Mapped[list[str]] = mapped_column(
        JSONType,
        nullable=False,
        default=list,
    )

    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    @property
    def position(self) -> dict[str, float]:
        """Canvas position as an {x, y} mapping."""
        return {"x": self.position_x, "y": self.position_y}

    def __repr__(self) -> str:
        return f"<Node(id='{self.id}', type={self.node_type}, flow_id={self.flow_id})>"


__all__ = [
    "Flow",
    "Node",
    "generate_node_id",
]
