"""Entity repositories.

Each repository wraps a RecordStore bound to the request session and
exposes explicit finder methods for one entity.
"""

from ivrflow.repositories.flows import FlowRepository
from ivrflow.repositories.nodes import NodeRepository
from ivrflow.repositories.projects import ProjectRepository
from ivrflow.repositories.tokens import TokenRepository
from ivrflow.repositories.users import UserRepository

__all__ = [
    "FlowRepository",
    "NodeRepository",
    "ProjectRepository",
    "TokenRepository",
    "UserRepository",
]
