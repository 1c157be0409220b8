"""Tests for UserService."""

import pytest

from ivrflow.core.exceptions import InputValidationError
from ivrflow.schemas.user import UserCreate
from ivrflow.services.user_service import UserService

PASSWORD = "correct-horse-battery"


class TestUserService:
    """Registration and credential checks."""

    @pytest.mark.asyncio
    async def test_register_hashes_password(self, db_session):
        user = await UserService(db_session).register(
            UserCreate(name="Bo", email="Bo@Bank.example", password="s3cret!")
        )

        assert user.id is not None
        assert user.email == "bo@bank.example"
        assert user.hashed_password != "s3cret!"
        assert user.hashed_password.startswith("$2b$")

    @pytest.mark.asyncio
    async def test_register_duplicate_email_case_insensitive(self, db_session, test_user):
        with pytest.raises(InputValidationError, match="Email already in use"):
            await UserService(db_session).register(
                UserCreate(name="Ana again", email="ANA@bank.example", password="x")
            )

    @pytest.mark.asyncio
    async def test_authenticate_success(self, db_session, test_user):
        user = await UserService(db_session).authenticate("ana@bank.example", PASSWORD)

        assert user is not None
        assert user.id == test_user.id

    @pytest.mark.asyncio
    async def test_authenticate_wrong_password(self, db_session, test_user):
        assert await UserService(db_session).authenticate("ana@bank.example", "nope") is None

    @pytest.mark.asyncio
    async def test_authenticate_unknown_email(self, db_session):
        assert await UserService(db_session).authenticate("ghost@bank.example", PASSWORD) is None

    @pytest.mark.asyncio
    async def test_get(self, db_session, test_user):
        assert (await UserService(db_session).get(test_user.id)).email == "ana@bank.example"
