"""Flow graph model exceptions.

All of them are client errors: they describe an edit that would break
the shape of a flow, so they map to HTTP 400 through InputValidationError.
"""

from __future__ import annotations

from typing import Any

from ivrflow.core.exceptions import InputValidationError


class FlowGraphError(InputValidationError):
    """Base exception for invalid flow edits.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code.
        details: Additional error context as dictionary.
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.error_code = error_code


class PinnedNodeError(FlowGraphError):
    """Raised when an edit would move or delete the start node."""

    def __init__(self, node_id: str, operation: str) -> None:
        super().__init__(
            message=f"The start node cannot be {operation}",
            error_code="START_NODE_PINNED",
            details={"node_id": node_id, "operation": operation},
        )
        self.node_id = node_id
        self.operation = operation


class NodeNotInFlowError(FlowGraphError):
    """Raised when an edit references a node id the flow does not have."""

    def __init__(self, node_id: str) -> None:
        super().__init__(
            message=f"Node '{node_id}' is not part of this flow",
            error_code="NODE_NOT_IN_FLOW",
            details={"node_id": node_id},
        )
        self.node_id = node_id


class EdgeNotFoundError(FlowGraphError):
    """Raised when removing a connection that does not exist."""

    def __init__(self, source: str, target: str) -> None:
        super().__init__(
            message=f"No connection from '{source}' to '{target}'",
            error_code="EDGE_NOT_FOUND",
            details={"source": source, "target": target},
        )
        self.source = source
        self.target = target


class DuplicateStartNodeError(FlowGraphError):
    """Raised when an edit would give a flow a second start node."""

    def __init__(self) -> None:
        super().__init__(
            message="A flow can only have one start node",
            error_code="DUPLICATE_START_NODE",
        )


class InvalidNodeSetError(FlowGraphError):
    """Raised when a submitted node set breaks a save invariant.

    Attributes:
        problems: One human-readable entry per violation.
    """

    def __init__(self, problems: list[str]) -> None:
        super().__init__(
            message="Invalid node set: " + "; ".join(problems),
            error_code="INVALID_NODE_SET",
            details={"problems": problems},
        )
        self.problems = problems


__all__ = [
    "DuplicateStartNodeError",
    "EdgeNotFoundError",
    "FlowGraphError",
    "InvalidNodeSetError",
    "NodeNotInFlowError",
    "PinnedNodeError",
]
