"""Account API Router.

Registration, login (JWT issuance) and the current user's profile.
"""

from __future__ import annotations

from fastapi import APIRouter

from ivrflow.api.deps import (  # noqa: TC001 - Required at runtime for FastAPI
    CurrentUser,
    DBSession,
)
from ivrflow.core.exceptions import InvalidCredentialsError
from ivrflow.core.jwt import create_access_token
from ivrflow.schemas.user import (
    AccessTokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from ivrflow.services.user_service import UserService

router = APIRouter()


@router.post(
    "/register",
    response_model=UserResponse,
    summary="Register an account",
    description="Create a user. Fails with 400 when the email is already in use.",
)
async def register(data: UserCreate, db: DBSession) -> UserResponse:
    user = await UserService(db).register(data)
    return UserResponse.model_validate(user)


@router.post(
    "/auth/login",
    response_model=AccessTokenResponse,
    summary="Log in",
    description="Exchange email and password for a bearer token.",
)
async def login(data: UserLogin, db: DBSession) -> AccessTokenResponse:
    user = await UserService(db).authenticate(data.email, data.password)
    if user is None:
        raise InvalidCredentialsError()
    return AccessTokenResponse(access_token=create_access_token(user.id))


@router.get(
    "/auth/me",
    response_model=UserResponse,
    summary="Current user",
)
async def read_current_user(current_user: CurrentUser) -> UserResponse:
    return UserResponse.model_validate(current_user)
