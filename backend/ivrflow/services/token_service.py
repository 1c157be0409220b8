"""Token service layer.

Tokens are PII field definitions. Nodes refer to them by id only, so
deleting a token never touches any node. Tokens are listed either for one
project or across every project a user owns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ivrflow.core.exceptions import ResourceNotFoundError
from ivrflow.core.logging import get_logger
from ivrflow.models.enums import TokenType
from ivrflow.repositories import ProjectRepository, TokenRepository

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from ivrflow.models import Project, Token
    from ivrflow.schemas.token import TokenCreate, TokenUpdate

logger = get_logger(__name__)


@dataclass
class ProjectToken:
    """A token together with the project that owns it."""

    token: Token
    project: Project


class TokenService:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.tokens = TokenRepository(db)
        self.projects = ProjectRepository(db)

    async def list_for_project(self, project_id: uuid.UUID) -> list[Token]:
        return await self.tokens.list_for_project(project_id)

    async def list_for_owner(self, user_id: uuid.UUID) -> list[ProjectToken]:
        """Every token in every project owned by ``user_id``."""
        projects = {p.id: p for p in await self.projects.list_for_owner(user_id)}
        tokens = await self.tokens.list_for_projects(list(projects))
        return [ProjectToken(token=t, project=projects[t.project_id]) for t in tokens]

    async def create(self, project: Project, data: TokenCreate) -> Token:
        token = await self.tokens.create(
            project_id=project.id,
            name=data.name,
            token_type=TokenType(data.type),
            description=data.description,
            format=data.format,
        )
        logger.info(
            "Token created",
            extra={
                "context": {
                    "token_id": str(token.id),
                    "project_id": str(project.id),
                    "token_type": str(token.token_type),
                    "action": "create_token",
                }
            },
        )
        return token

    async def update(self, token: Token, data: TokenUpdate) -> Token:
        """Apply the fields that were sent. name and type cannot be cleared."""
        changes: dict[str, Any] = {}
        sent = data.model_dump(exclude_unset=True)
        if sent.get("name"):
            changes["name"] = sent["name"]
        if sent.get("type"):
            changes["token_type"] = TokenType(sent["type"])
        for field in ("description", "format"):
            if field in sent:
                changes[field] = sent[field]

        updated = await self.tokens.update(token.id, **changes)
        if updated is None:
            raise ResourceNotFoundError("token", token.id)

        logger.info(
            "Token updated",
            extra={
                "context": {
                    "token_id": str(token.id),
                    "fields": sorted(changes),
                    "action": "update_token",
                }
            },
        )
        return updated

    async def delete(self, token: Token) -> None:
        await self.tokens.delete(token.id)
        logger.info(
            "Token deleted",
            extra={"context": {"token_id": str(token.id), "action": "delete_token"}},
        )


__all__ = ["ProjectToken", "TokenService"]
