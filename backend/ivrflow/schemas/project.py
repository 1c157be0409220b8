"""Pydantic schemas for Project operations."""

from uuid import UUID

from pydantic import Field

from ivrflow.schemas.base import (
    BaseResponse,
    BaseSchema,
    DescriptionField,
    NameField,
    OptionalNameField,
)
from ivrflow.schemas.flow import FlowResponse, FlowSummary
from ivrflow.schemas.token import TokenResponse


class ProjectCreate(BaseSchema):
    """Schema for creating a project."""

    name: str = NameField
    description: str | None = DescriptionField


class ProjectUpdate(BaseSchema):
    """Schema for updating a project.

    An empty or missing name keeps the current one; description is replaced
    only when it is sent.
    """

    name: str | None = OptionalNameField
    description: str | None = DescriptionField


class ProjectResponse(BaseResponse):
    """Project fields without children."""

    name: str
    description: str | None = None
    user_id: UUID


class ProjectListItem(ProjectResponse):
    """Project as listed on the dashboard, with flow references."""

    flows: list[FlowSummary] = Field(default_factory=list)


class ProjectDetail(ProjectResponse):
    """Project with its flows and tokens."""

    flows: list[FlowResponse] = Field(default_factory=list)
    tokens: list[TokenResponse] = Field(default_factory=list)


class ProjectListEnvelope(BaseSchema):
    projects: list[ProjectListItem]


class ProjectEnvelope(BaseSchema):
    project: ProjectResponse


class ProjectDetailEnvelope(BaseSchema):
    project: ProjectDetail


class ProjectCreatedEnvelope(BaseSchema):
    message: str
    project: ProjectResponse


__all__ = [
    "ProjectCreate",
    "ProjectCreatedEnvelope",
    "ProjectDetail",
    "ProjectDetailEnvelope",
    "ProjectEnvelope",
    "ProjectListEnvelope",
    "ProjectListItem",
    "ProjectResponse",
    "ProjectUpdate",
]
