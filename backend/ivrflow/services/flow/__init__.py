"""Flow graph model.

In-memory editors for a flow's node set: FlowGraph backs the graph
designer and SequentialFlow the sequential designer. Both work on
detached FlowNode values that the flow service validates and saves as a
whole.
"""

from ivrflow.services.flow.exceptions import (
    DuplicateStartNodeError,
    EdgeNotFoundError,
    FlowGraphError,
    InvalidNodeSetError,
    NodeNotInFlowError,
    PinnedNodeError,
)
from ivrflow.services.flow.graph import Edge, FlowGraph
from ivrflow.services.flow.layout import (
    order_nodes,
    ordinal_to_position,
    ordinals,
    relayout,
)
from ivrflow.services.flow.node import FlowNode, new_start_node, validate_node_set
from ivrflow.services.flow.sequence import SequentialFlow

__all__ = [
    # Models
    "Edge",
    "FlowGraph",
    "FlowNode",
    "SequentialFlow",
    # Helpers
    "new_start_node",
    "order_nodes",
    "ordinal_to_position",
    "ordinals",
    "relayout",
    "validate_node_set",
    # Exceptions
    "DuplicateStartNodeError",
    "EdgeNotFoundError",
    "FlowGraphError",
    "InvalidNodeSetError",
    "NodeNotInFlowError",
    "PinnedNodeError",
]
