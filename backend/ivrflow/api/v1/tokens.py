"""Token API Router.

CRUD endpoints for PII token definitions. Creating takes the owning
project id and listing takes it optionally; without it every token across
the caller's projects is listed. The other routes authorise through the
token's project.
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from ivrflow.api.deps import (  # noqa: TC001 - Required at runtime for FastAPI
    Access,
    CurrentUser,
    DBSession,
)
from ivrflow.schemas.base import MessageResponse
from ivrflow.schemas.token import (
    TokenCreate,
    TokenCreatedEnvelope,
    TokenEnvelope,
    TokenListEnvelope,
    TokenListItem,
    TokenProjectSummary,
    TokenResponse,
    TokenUpdate,
)
from ivrflow.services.access import ResourceKind
from ivrflow.services.token_service import ProjectToken, TokenService

router = APIRouter()


def list_item(entry: ProjectToken) -> TokenListItem:
    return TokenListItem.model_validate(
        {
            **TokenResponse.model_validate(entry.token).model_dump(),
            "project": TokenProjectSummary.model_validate(entry.project),
        }
    )


@router.get(
    "",
    response_model=TokenListEnvelope,
    summary="List tokens of a project, or of every project the caller owns",
)
async def list_tokens(
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
    project_id: Annotated[UUID | None, Query(alias="projectId")] = None,
) -> TokenListEnvelope:
    service = TokenService(db)
    if project_id is None:
        listed = await service.list_for_owner(current_user.id)
    else:
        target = await access.authorize(current_user, ResourceKind.PROJECT, project_id)
        listed = [
            ProjectToken(token=token, project=target.project)
            for token in await service.list_for_project(target.project.id)
        ]
    return TokenListEnvelope(tokens=[list_item(entry) for entry in listed])


@router.post(
    "",
    response_model=TokenCreatedEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a token",
)
async def create_token(
    data: TokenCreate,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> TokenCreatedEnvelope:
    target = await access.authorize(current_user, ResourceKind.PROJECT, data.project_id)
    token = await TokenService(db).create(target.project, data)
    return TokenCreatedEnvelope(
        message="Token created successfully",
        token=TokenResponse.model_validate(token),
    )


@router.get("/{token_id}", response_model=TokenEnvelope, summary="Get a token")
async def get_token(
    token_id: UUID,
    access: Access,
    current_user: CurrentUser,
) -> TokenEnvelope:
    target = await access.authorize(current_user, ResourceKind.TOKEN, token_id)
    return TokenEnvelope(token=TokenResponse.model_validate(target.resource))


@router.put("/{token_id}", response_model=TokenEnvelope, summary="Update a token")
async def update_token(
    token_id: UUID,
    data: TokenUpdate,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> TokenEnvelope:
    target = await access.authorize(current_user, ResourceKind.TOKEN, token_id)
    token = await TokenService(db).update(target.resource, data)
    return TokenEnvelope(token=TokenResponse.model_validate(token))


@router.delete("/{token_id}", response_model=MessageResponse, summary="Delete a token")
async def delete_token(
    token_id: UUID,
    db: DBSession,
    access: Access,
    current_user: CurrentUser,
) -> MessageResponse:
    target = await access.authorize(current_user, ResourceKind.TOKEN, token_id)
    await TokenService(db).delete(target.resource)
    return MessageResponse(message="Token deleted successfully")
