"""Project API Router.

CRUD endpoints for projects. Every route resolves its project through the
access-control layer, so foreign projects answer 403 and unknown ids 404.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, status

from ivrflow.api.deps import (  # noqa: TC001 - Required at runtime for FastAPI
    Access,
    CurrentUser,
    DBSession,
)
from ivrflow.schemas.base import MessageResponse
from ivrflow.schemas.flow import FlowResponse, FlowSummary
from ivrflow.schemas.project import (
    ProjectCreate,
    ProjectCreatedEnvelope,
    ProjectDetail,
    ProjectDetailEnvelope,
    ProjectEnvelope,
    ProjectListEnvelope,
    ProjectListItem,
    ProjectResponse,
    ProjectUpdate,
)
from ivrflow.schemas.token import TokenResponse
from ivrflow.services.access import ResourceKind
from ivrflow.services.project_service import ProjectService

router = APIRouter()


@router.get(
    "",
    response_model=ProjectListEnvelope,
    summary="List projects",
    description="Projects owned by the caller, each with {id, name} of its flows.",
)
async def list_projects(db: DBSession, current_user: CurrentUser) -> ProjectListEnvelope:
    overviews = await ProjectService(db).list_for_user(current_user)
    items = []
    for overview in overviews:
        item = ProjectListItem.model_validate(overview.project)
        item.flows = [FlowSummary.model_validate(flow) for flow in overview.flows]
        items.append(item)
    return ProjectListEnvelope(projects=items)


@router.post(
    "",
    response_model=ProjectCreatedEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
)
async def create_project(
    data: ProjectCreate,
    db: DBSession,
    current_user: CurrentUser,
) -> ProjectCreatedEnvelope:
    project = await ProjectService(db).create(current_user, data)
    return ProjectCreatedEnvelope(
        message="Project created successfully",
        project=ProjectResponse.model_validate(project),
    )


@router.get(
    "/{project_id}",
    response_model=ProjectDetailEnvelope,
    summary="Get a project",
    description="Project with its flows (including nodes) and tokens.",
)
async def get_project(
    project_id: UUID,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> ProjectDetailEnvelope:
    target = await access.authorize(current_user, ResourceKind.PROJECT, project_id)
    bundle = await ProjectService(db).get_bundle(target.project)

    detail = ProjectDetail.model_validate(bundle.project)
    detail.flows = [FlowResponse.from_flow(s.flow, s.nodes) for s in bundle.flows]
    detail.tokens = [TokenResponse.model_validate(token) for token in bundle.tokens]
    return ProjectDetailEnvelope(project=detail)


@router.put(
    "/{project_id}",
    response_model=ProjectEnvelope,
    summary="Update a project",
)
async def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> ProjectEnvelope:
    target = await access.authorize(current_user, ResourceKind.PROJECT, project_id)
    project = await ProjectService(db).update(target.project, data)
    return ProjectEnvelope(project=ProjectResponse.model_validate(project))


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    summary="Delete a project",
    description="Deletes the project with its tokens, flows and nodes.",
)
async def delete_project(
    project_id: UUID,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> MessageResponse:
    target = await access.authorize(current_user, ResourceKind.PROJECT, project_id)
    await ProjectService(db).delete(target.project)
    return MessageResponse(message="Project deleted successfully")
