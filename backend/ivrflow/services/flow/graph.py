"""Graph-designer model of a flow.

Adjacency lives on the nodes themselves: each node's ``next_node_ids`` is
an ordered list of successor ids. Edges are never stored; they are derived
from those lists on demand, one edge per list entry, so duplicate entries
produce parallel edges and list order is the branch order.

Time Complexity:
- connect / get: O(1)
- disconnect, remove_node, edges, dangling_references: O(V + E)

Space Complexity: O(V + E)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ivrflow.models.enums import NodeType
from ivrflow.models.flow import generate_node_id
from ivrflow.services.flow.exceptions import (
    DuplicateStartNodeError,
    NodeNotInFlowError,
    PinnedNodeError,
)
from ivrflow.services.flow.node import FlowNode, NodeRecord, new_start_node


@dataclass(frozen=True)
class Edge:
    """Directed edge derived from ``source.next_node_ids[index]``."""

    source: str
    target: str
    index: int
    label: str | None = None

    @property
    def id(self) -> str:
        return f"{self.source}-{self.target}-{self.index}"


class FlowGraph:
    """Mutable node graph of one flow.

    Example:
        >>> graph = FlowGraph([new_start_node()])
        >>> collect = graph.add_node(NodeType.COLLECT, position=(250, 250))
        >>> graph.connect(graph.start_node.id, collect.id)
        >>> [edge.target for edge in graph.edges()]
        [collect.id]
    """

    __slots__ = ("_nodes",)

    def __init__(self, nodes: Iterable[FlowNode] = ()) -> None:
        self._nodes: dict[str, FlowNode] = {}
        for node in nodes:
            self._nodes[node.id] = node.copy()

    @classmethod
    def from_records(cls, records: Iterable[NodeRecord]) -> FlowGraph:
        return cls(FlowNode.from_record(record) for record in records)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def nodes(self) -> list[FlowNode]:
        return list(self._nodes.values())

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def start_node(self) -> FlowNode | None:
        for node in self._nodes.values():
            if node.is_start:
                return node
        return None

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def get(self, node_id: str) -> FlowNode:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise NodeNotInFlowError(node_id) from None

    def successors(self, node_id: str) -> list[str]:
        return list(self.get(node_id).next_node_ids)

    def edges(self) -> list[Edge]:
        """Derive the edge list, labelling the outputs of branch nodes."""
        edges: list[Edge] = []
        for node in self._nodes.values():
            is_branch = node.node_type == NodeType.BRANCH
            for index, target in enumerate(node.next_node_ids):
                label = f"Option {index + 1}" if is_branch else None
                edges.append(Edge(source=node.id, target=target, index=index, label=label))
        return edges

    def dangling_references(self) -> list[tuple[str, str]]:
        """Return (source, target) pairs whose target is not in the flow."""
        return [
            (node.id, target)
            for node in self._nodes.values()
            for target in node.next_node_ids
            if target not in self._nodes
        ]

    # =========================================================================
    # Mutations
    # =========================================================================

    def connect(self, source: str, target: str) -> Edge:
        """Append ``target`` to the successors of ``source``.

        Connecting the same pair twice adds a second, parallel edge.
        """
        source_node = self.get(source)
        self.get(target)
        source_node.next_node_ids.append(target)
        index = len(source_node.next_node_ids) - 1
        label = f"Option {index + 1}" if source_node.node_type == NodeType.BRANCH else None
        return Edge(source=source, target=target, index=index, label=label)

    def disconnect(self, source: str, target: str) -> bool:
        """Remove the first ``source -> target`` entry.

        Returns:
            False when no such edge exists.
        """
        successors = self.get(source).next_node_ids
        if target not in successors:
            return False
        successors.remove(target)
        return True

    def add_node(
        self,
        node_type: NodeType,
        position: tuple[float, float] = (0.0, 0.0),
        node_id: str | None = None,
        title: str | None = None,
        prompt: str | None = None,
    ) -> FlowNode:
        """Add a node dropped onto the canvas.

        The default title is "<Type> Node", e.g. "Collect Node".
        """
        node_type = NodeType(node_type)
        if node_type == NodeType.START and self.start_node is not None:
            raise DuplicateStartNodeError()

        node_id = node_id or generate_node_id()
        if node_id in self._nodes:
            raise ValueError(f"Node id '{node_id}' already exists in this flow")

        x, y = position
        node = FlowNode(
            id=node_id,
            node_type=node_type,
            title=title if title is not None else f"{node_type.value.capitalize()} Node",
            prompt=prompt,
            x=x,
            y=y,
        )
        self._nodes[node.id] = node
        return node

    def update_node(self, node_id: str, **changes: object) -> FlowNode:
        """Change title, prompt, token_id, validation_rules, x, y or node_type."""
        node = self.get(node_id)
        allowed = {"title", "prompt", "token_id", "validation_rules", "x", "y", "node_type"}
        unknown = set(changes) - allowed
        if unknown:
            raise ValueError(f"Cannot update node field(s): {', '.join(sorted(unknown))}")

        if "node_type" in changes:
            new_type = NodeType(changes["node_type"])  # type: ignore[arg-type]
            if node.is_start and new_type != NodeType.START:
                raise PinnedNodeError(node_id, "retyped")
            if new_type == NodeType.START and not node.is_start and self.start_node:
                raise DuplicateStartNodeError()
            changes["node_type"] = new_type

        for name, value in changes.items():
            setattr(node, name, value)
        return node

    def remove_node(self, node_id: str) -> FlowNode:
        """Remove a node and every edge pointing at it."""
        node = self.get(node_id)
        if node.is_start:
            raise PinnedNodeError(node_id, "deleted")

        del self._nodes[node_id]
        for other in self._nodes.values():
            if node_id in other.next_node_ids:
                other.next_node_ids = [t for t in other.next_node_ids if t != node_id]
        return node

    def ensure_start(self) -> FlowNode:
        """Seed a start node if the flow has none."""
        start = self.start_node
        if start is None:
            start = new_start_node()
            self._nodes = {start.id: start, **self._nodes}
        return start

    def to_nodes(self) -> list[FlowNode]:
        """Detached copies of the nodes, in insertion order."""
        return [node.copy() for node in self._nodes.values()]


__all__ = [
    "Edge",
    "FlowGraph",
]
