"""Access-control layer.

Every authenticated route resolves its target through AccessControl, so the
same checks run in the same order everywhere:

1. no or invalid bearer token            -> UnauthenticatedError (401)
2. token subject is not an existing user -> UserNotFoundError (404)
3. target resource does not exist        -> ResourceNotFoundError (404)
4. owning project belongs to someone else -> ForbiddenError (403)

Ownership chains:
    Project                 -> project.user_id
    Flow  -> Project        -> project.user_id
    Node  -> Flow -> Project -> project.user_id
    Token -> Project        -> project.user_id

Authorisation has no side effects.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from ivrflow.core.exceptions import (
    ForbiddenError,
    ResourceNotFoundError,
    UnauthenticatedError,
    UserNotFoundError,
)
from ivrflow.core.jwt import verify_token
from ivrflow.core.logging import get_logger
from ivrflow.repositories import (
    FlowRepository,
    NodeRepository,
    ProjectRepository,
    TokenRepository,
    UserRepository,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from ivrflow.models import Flow, Project, User

logger = get_logger(__name__)


class ResourceKind(str, Enum):
    """Kinds of resource an authorisation check can target."""

    PROJECT = "project"
    FLOW = "flow"
    NODE = "node"
    TOKEN = "token"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AuthorizedResource:
    """Outcome of a successful check.

    Attributes:
        kind: What was authorised.
        resource: The target row (Project, Flow, Node or Token).
        project: The project at the top of the ownership chain.
        flow: The parent flow, for FLOW and NODE checks.
    """

    kind: ResourceKind
    resource: Any
    project: Project
    flow: Flow | None = None


class AccessControl:
    """Resolve callers and authorise access to owned resources."""

    def __init__(self, db: AsyncSession) -> None:
        self.users = UserRepository(db)
        self.projects = ProjectRepository(db)
        self.flows = FlowRepository(db)
        self.nodes = NodeRepository(db)
        self.tokens = TokenRepository(db)

    async def authenticate(self, bearer_token: str | None) -> User:
        """Resolve the user a bearer token was issued to.

        Raises:
            UnauthenticatedError: If the token is missing, invalid or expired.
            UserNotFoundError: If the token's user no longer exists.
        """
        if not bearer_token:
            raise UnauthenticatedError()

        subject = verify_token(bearer_token)
        if subject is None:
            raise UnauthenticatedError()

        try:
            user_id = uuid.UUID(subject)
        except ValueError:
            raise UnauthenticatedError() from None

        user = await self.users.get(user_id)
        if user is None:
            logger.warning(
                "Token subject does not match any user",
                extra={"context": {"user_id": subject, "action": "authenticate"}},
            )
            raise UserNotFoundError()
        return user

    async def authorize(
        self,
        user: User,
        kind: ResourceKind,
        resource_id: uuid.UUID | str,
        *,
        flow_id: uuid.UUID | None = None,
    ) -> AuthorizedResource:
        """Check that ``user`` owns the resource identified by ``resource_id``.

        Args:
            user: Authenticated caller.
            kind: Kind of the target resource.
            resource_id: Id of the target. Node ids are flow-scoped strings.
            flow_id: Parent flow id, required for NODE checks.

        Raises:
            ResourceNotFoundError: If the target or a link of its chain is missing.
            ForbiddenError: If the chain ends at another user's project.
        """
        flow: Flow | None = None

        if kind == ResourceKind.PROJECT:
            resource = await self.projects.get(resource_id)  # type: ignore[arg-type]
            if resource is None:
                raise ResourceNotFoundError("project", resource_id)
            project = resource
        elif kind == ResourceKind.FLOW:
            flow = resource = await self.flows.get(resource_id)  # type: ignore[arg-type]
            if resource is None:
                raise ResourceNotFoundError("flow", resource_id)
            project = await self._project_of(resource.project_id)
        elif kind == ResourceKind.NODE:
            if flow_id is None:
                raise ValueError("flow_id is required to authorise a node")
            flow = await self.flows.get(flow_id)
            if flow is None:
                raise ResourceNotFoundError("flow", flow_id)
            resource = await self.nodes.get(flow.id, str(resource_id))
            if resource is None:
                raise ResourceNotFoundError("node", resource_id)
            project = await self._project_of(flow.project_id)
        elif kind == ResourceKind.TOKEN:
            resource = await self.tokens.get(resource_id)  # type: ignore[arg-type]
            if resource is None:
                raise ResourceNotFoundError("token", resource_id)
            project = await self._project_of(resource.project_id)
        else:
            raise ValueError(f"Unsupported resource kind: {kind}")

        if project.user_id != user.id:
            logger.warning(
                "Access denied to resource owned by another user",
                extra={
                    "context": {
                        "user_id": str(user.id),
                        "resource_kind": str(kind),
                        "resource_id": str(resource_id),
                        "project_id": str(project.id),
                        "action": "authorize",
                        "status": "denied",
                    }
                },
            )
            raise ForbiddenError()

        return AuthorizedResource(kind=kind, resource=resource, project=project, flow=flow)

    async def _project_of(self, project_id: uuid.UUID) -> Project:
        project = await self.projects.get(project_id)
        if project is None:
            raise ResourceNotFoundError("project", project_id)
        return project


__all__ = [
    "AccessControl",
    "AuthorizedResource",
    "ResourceKind",
]
