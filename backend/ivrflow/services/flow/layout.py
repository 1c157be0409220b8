"""Position layout helpers.

Positions are stored as canvas coordinates. The sequential editor works in
ordinals instead: ordinal ``n`` sits at x=250, y=100 + n * 150, and the
ordinal of a stored node is its rank when sorted by (y, x) with the start
node always first.
"""

from __future__ import annotations

from collections.abc import Sequence

from ivrflow.services.flow.node import FlowNode

COLUMN_X = 250.0
FIRST_ROW_Y = 100.0
ROW_SPACING = 150.0


def ordinal_to_position(ordinal: int) -> tuple[float, float]:
    """Return the (x, y) coordinate of sequential slot ``ordinal``.

    Examples:
        >>> ordinal_to_position(0)
        (250.0, 100.0)
        >>> ordinal_to_position(2)
        (250.0, 400.0)
    """
    if ordinal < 0:
        raise ValueError(f"ordinal must be >= 0, got {ordinal}")
    return COLUMN_X, FIRST_ROW_Y + ordinal * ROW_SPACING


def order_nodes(nodes: Sequence[FlowNode]) -> list[FlowNode]:
    """Sort nodes top-to-bottom, left-to-right, start node first.

    The sort is stable, so nodes sharing a coordinate keep their saved order.
    """
    return sorted(nodes, key=lambda node: (not node.is_start, node.y, node.x))


def ordinals(nodes: Sequence[FlowNode]) -> dict[str, int]:
    """Map node id to its sequential ordinal."""
    return {node.id: index for index, node in enumerate(order_nodes(nodes))}


def relayout(nodes: Sequence[FlowNode]) -> None:
    """Place ``nodes`` on the sequential grid in their current order."""
    for index, node in enumerate(nodes):
        node.x, node.y = ordinal_to_position(index)


__all__ = [
    "COLUMN_X",
    "FIRST_ROW_Y",
    "ROW_SPACING",
    "order_nodes",
    "ordinal_to_position",
    "ordinals",
    "relayout",
]
