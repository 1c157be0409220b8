"""SQLAlchemy models.

This package contains all database models. Importing it registers every
table on Base.metadata (used by init_models and Alembic).
"""

from ivrflow.models.base import GUID, Base, TimestampMixin, UUIDMixin
from ivrflow.models.enums import NodeType, TokenType
from ivrflow.models.flow import Flow, Node, generate_node_id
from ivrflow.models.project import Project
from ivrflow.models.token import Token
from ivrflow.models.user import User

__all__ = [
    # Base classes
    "Base",
    "GUID",
    "UUIDMixin",
    "TimestampMixin",
    # Enums
    "NodeType",
    "TokenType",
    # Models
    "User",
    "Project",
    "Token",
    "Flow",
    "Node",
    "generate_node_id",
]
