"""Business logic services.

This package contains service classes that implement business logic,
the access-control layer and the flow graph model (services.flow).
"""

from ivrflow.services.access import AccessControl, AuthorizedResource, ResourceKind
from ivrflow.services.flow_service import FlowService, FlowSnapshot
from ivrflow.services.project_service import (
    ProjectBundle,
    ProjectOverview,
    ProjectService,
)
from ivrflow.services.token_service import TokenService
from ivrflow.services.user_service import UserService

__all__ = [
    "AccessControl",
    "AuthorizedResource",
    "FlowService",
    "FlowSnapshot",
    "ProjectBundle",
    "ProjectOverview",
    "ProjectService",
    "ResourceKind",
    "TokenService",
    "UserService",
]
