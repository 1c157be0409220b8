"""Project service layer.

Deleting a project cascades explicitly: its tokens, the nodes of each of
its flows, the flows, then the project itself. All steps share the
caller's transaction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ivrflow.core.exceptions import ResourceNotFoundError
from ivrflow.core.logging import LogContext, get_logger
from ivrflow.repositories import (
    FlowRepository,
    NodeRepository,
    ProjectRepository,
    TokenRepository,
)
from ivrflow.services.flow_service import FlowService, FlowSnapshot

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from ivrflow.models import Flow, Project, Token, User
    from ivrflow.schemas.project import ProjectCreate, ProjectUpdate

logger = get_logger(__name__)


@dataclass
class ProjectOverview:
    """Project with its flows, as shown on the dashboard."""

    project: Project
    flows: list[Flow] = field(default_factory=list)


@dataclass
class ProjectBundle:
    """Project with its flows (and their nodes) and tokens."""

    project: Project
    flows: list[FlowSnapshot] = field(default_factory=list)
    tokens: list[Token] = field(default_factory=list)


class ProjectService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.projects = ProjectRepository(db)
        self.flows = FlowRepository(db)
        self.nodes = NodeRepository(db)
        self.tokens = TokenRepository(db)

    async def list_for_user(self, user: User) -> list[ProjectOverview]:
        return [
            ProjectOverview(project=project, flows=await self.flows.list_for_project(project.id))
            for project in await self.projects.list_for_owner(user.id)
        ]

    async def create(self, user: User, data: ProjectCreate) -> Project:
        project = await self.projects.create(
            user_id=user.id,
            name=data.name,
            description=data.description,
        )
        logger.info(
            "Project created",
            extra={
                "context": {
                    "project_id": str(project.id),
                    "user_id": str(user.id),
                    "action": "create_project",
                }
            },
        )
        return project

    async def get_bundle(self, project: Project) -> ProjectBundle:
        return ProjectBundle(
            project=project,
            flows=await FlowService(self.db).list_for_project(project.id),
            tokens=await self.tokens.list_for_project(project.id),
        )

    async def update(self, project: Project, data: ProjectUpdate) -> Project:
        """An empty name keeps the current one; description is replaced when sent."""
        changes: dict[str, Any] = {"name": data.name or project.name}
        if "description" in data.model_fields_set:
            changes["description"] = data.description

        updated = await self.projects.update(project.id, **changes)
        if updated is None:
            raise ResourceNotFoundError("project", project.id)
        return updated

    async def delete(self, project: Project) -> None:
        """Delete the project together with everything it owns."""
        with LogContext(project_id=str(project.id), action="delete_project"):
            await self.tokens.delete_for_project(project.id)

            flows = await self.flows.list_for_project(project.id)
            for flow in flows:
                await self.nodes.delete_for_flow(flow.id)
                await self.flows.delete(flow.id)

            await self.projects.delete(project.id)

            logger.info(
                "Project deleted with its flows and tokens",
                extra={"context": {"flow_count": len(flows), "status": "deleted"}},
            )


__all__ = [
    "ProjectBundle",
    "ProjectOverview",
    "ProjectService",
]
