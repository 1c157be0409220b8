"""API dependencies.

Common dependencies for API routes: database sessions, bearer-token
authentication and the access-control layer.
"""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from ivrflow.db.session import get_db
from ivrflow.models.user import User
from ivrflow.services.access import AccessControl

# =============================================================================
# Database Session Dependency
# =============================================================================

DBSession = Annotated[AsyncSession, Depends(get_db)]
"""Type alias for database session dependency injection.

Usage:
    @router.get("/projects")
    async def list_projects(db: DBSession):
        ...
"""


# =============================================================================
# Access Control Dependencies
# =============================================================================


def get_access_control(db: DBSession) -> AccessControl:
    """Access-control layer bound to the request session."""
    return AccessControl(db)


Access = Annotated[AccessControl, Depends(get_access_control)]


# =============================================================================
# Authentication Dependencies
# =============================================================================


def get_bearer_token(
    authorization: Annotated[str | None, Header()] = None,
) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header.

    Returns:
        The token, or None when the header is missing or not a bearer header.
    """
    if not authorization:
        return None

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_current_user(
    access: Access,
    token: Annotated[str | None, Depends(get_bearer_token)],
) -> User:
    """Get the current authenticated user.

    Raises:
        UnauthenticatedError: If the token is missing, invalid or expired (401).
        UserNotFoundError: If the token's user no longer exists (404).
    """
    return await access.authenticate(token)


CurrentUser = Annotated[User, Depends(get_current_user)]
"""Type alias for current user dependency injection.

Usage:
    @router.get("/auth/me")
    async def me(current_user: CurrentUser):
        return current_user
"""


__all__ = [
    "Access",
    "CurrentUser",
    "DBSession",
    "get_access_control",
    "get_bearer_token",
    "get_current_user",
]
