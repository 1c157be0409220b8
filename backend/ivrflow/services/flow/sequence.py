"""Sequential-designer model of a flow.

The sequential editor shows a flow as a numbered list. A node's ordinal is
its index; the start node is pinned at index 0. Every mutation renumbers
the list and re-lays out every node on the sequential grid.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from ivrflow.core.logging import get_logger
from ivrflow.models.enums import NodeType
from ivrflow.models.flow import generate_node_id
from ivrflow.services.flow.exceptions import (
    DuplicateStartNodeError,
    NodeNotInFlowError,
    PinnedNodeError,
)
from ivrflow.services.flow.layout import order_nodes, ordinal_to_position, relayout
from ivrflow.services.flow.node import FlowNode, NodeRecord, new_start_node

logger = get_logger(__name__)

Direction = Literal["up", "down"]


class SequentialFlow:
    """Ordered node list with the start node pinned first.

    A missing start node is seeded on construction, so an empty flow opens
    as a one-node sequence.
    """

    def __init__(self, nodes: Iterable[FlowNode] = ()) -> None:
        ordered = order_nodes([node.copy() for node in nodes])
        if not ordered or not ordered[0].is_start:
            x, y = ordinal_to_position(0)
            ordered.insert(0, new_start_node(x, y))
        self._nodes: list[FlowNode] = ordered

    @classmethod
    def from_records(cls, records: Iterable[NodeRecord]) -> SequentialFlow:
        return cls(FlowNode.from_record(record) for record in records)

    @property
    def nodes(self) -> list[FlowNode]:
        return list(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def index_of(self, node_id: str) -> int:
        for index, node in enumerate(self._nodes):
            if node.id == node_id:
                return index
        raise NodeNotInFlowError(node_id)

    def add_node(self, node_type: NodeType) -> FlowNode:
        """Append a node titled "New <type>" with an empty prompt."""
        node_type = NodeType(node_type)
        if node_type == NodeType.START:
            raise DuplicateStartNodeError()

        x, y = ordinal_to_position(len(self._nodes))
        node = FlowNode(
            id=generate_node_id(),
            node_type=node_type,
            title=f"New {node_type.value}",
            prompt="",
            x=x,
            y=y,
        )
        self._nodes.append(node)
        relayout(self._nodes)
        return node

    def move(self, node_id: str, direction: Direction) -> bool:
        """Swap a node with its neighbour.

        Returns:
            False when the node is already at a boundary: index 1 cannot
            move above the start node and the last node cannot move down.

        Raises:
            PinnedNodeError: If ``node_id`` is the start node.
            NodeNotInFlowError: If the node is not in this flow.
        """
        if direction not in ("up", "down"):
            raise ValueError(f"direction must be 'up' or 'down', got {direction!r}")

        index = self.index_of(node_id)
        if index == 0:
            raise PinnedNodeError(node_id, "moved")

        target = index - 1 if direction == "up" else index + 1
        if target < 1 or target >= len(self._nodes):
            logger.debug(
                "Move ignored at sequence boundary",
                extra={"context": {"node_id": node_id, "direction": direction, "index": index}},
            )
            return False

        self._nodes[index], self._nodes[target] = self._nodes[target], self._nodes[index]
        relayout(self._nodes)
        return True

    def delete(self, node_id: str) -> FlowNode:
        """Remove a node, strip it from every next_node_ids and renumber."""
        index = self.index_of(node_id)
        if index == 0:
            raise PinnedNodeError(node_id, "deleted")

        removed = self._nodes.pop(index)
        for node in self._nodes:
            if node_id in node.next_node_ids:
                node.next_node_ids = [t for t in node.next_node_ids if t != node_id]
        relayout(self._nodes)
        return removed

    def to_nodes(self) -> list[FlowNode]:
        return [node.copy() for node in self._nodes]


__all__ = [
    "Direction",
    "SequentialFlow",
]
