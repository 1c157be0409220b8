"""In-memory node representation shared by both flow editors.

FlowNode is a plain mutable value detached from the database session, so
editors can reorder and rewire nodes freely before the whole set is saved.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any, Protocol

from ivrflow.models.enums import NodeType
from ivrflow.models.flow import generate_node_id
from ivrflow.services.flow.exceptions import InvalidNodeSetError

START_TITLE = "Start"
START_PROMPT = "Start of authentication flow"


class NodeRecord(Protocol):
    """Attributes read from a persisted Node row."""

    id: str
    node_type: NodeType
    title: str
    prompt: str | None
    position_x: float
    position_y: float
    token_id: str | None
    validation_rules: Any
    next_node_ids: list[str]


@dataclass
class FlowNode:
    id: str
    node_type: NodeType
    title: str = ""
    prompt: str | None = None
    x: float = 0.0
    y: float = 0.0
    token_id: str | None = None
    validation_rules: Any = None
    next_node_ids: list[str] = field(default_factory=list)

    @property
    def is_start(self) -> bool:
        return self.node_type == NodeType.START

    @classmethod
    def from_record(cls, record: NodeRecord) -> FlowNode:
        return cls(
            id=record.id,
            node_type=NodeType(record.node_type),
            title=record.title,
            prompt=record.prompt,
            x=record.position_x,
            y=record.position_y,
            token_id=record.token_id,
            validation_rules=record.validation_rules,
            next_node_ids=list(record.next_node_ids or []),
        )

    def copy(self) -> FlowNode:
        return replace(self, next_node_ids=list(self.next_node_ids))

    def to_row(self) -> dict[str, Any]:
        """Column values for NodeRepository.replace_for_flow."""
        return {
            "id": self.id,
            "node_type": self.node_type,
            "title": self.title,
            "prompt": self.prompt,
            "position_x": self.x,
            "position_y": self.y,
            "token_id": self.token_id,
            "validation_rules": self.validation_rules,
            "next_node_ids": list(self.next_node_ids),
        }


def new_start_node(x: float = 250.0, y: float = 100.0) -> FlowNode:
    """The node every new flow is seeded with."""
    return FlowNode(
        id=generate_node_id(),
        node_type=NodeType.START,
        title=START_TITLE,
        prompt=START_PROMPT,
        x=x,
        y=y,
    )


def validate_node_set(nodes: Iterable[FlowNode]) -> None:
    """Check the invariants every saved node set must satisfy.

    - exactly one start node
    - node ids unique within the set
    - every next_node_ids entry names a node of the same set

    Raises:
        InvalidNodeSetError: Listing every violation found.
    """
    nodes = list(nodes)
    problems: list[str] = []

    starts = sum(1 for node in nodes if node.is_start)
    if starts != 1:
        problems.append(f"expected exactly one start node, found {starts}")

    counts = Counter(node.id for node in nodes)
    duplicates = sorted(node_id for node_id, count in counts.items() if count > 1)
    if duplicates:
        problems.append(f"duplicate node ids: {', '.join(duplicates)}")

    for node in nodes:
        missing = [target for target in node.next_node_ids if target not in counts]
        if missing:
            problems.append(
                f"node '{node.id}' points to unknown node(s): {', '.join(missing)}"
            )

    if problems:
        raise InvalidNodeSetError(problems)


__all__ = [
    "START_PROMPT",
    "START_TITLE",
    "FlowNode",
    "NodeRecord",
    "new_start_node",
    "validate_node_set",
]
