"""pytest configuration and fixtures for integration testing.

This module provides pytest fixtures for async database sessions with
transaction rollback, HTTP clients over the ASGI app, and sample users,
projects, flows and tokens.
"""

import os

# Settings are read on first import of ivrflow; keep tests fast and hermetic
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jwt-signing-only")

from collections.abc import AsyncGenerator
from typing import cast

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Session
from starlette.types import ASGIApp

from ivrflow.core.jwt import create_access_token
from ivrflow.core.security import hash_password
from ivrflow.main import app
from ivrflow.models import Base, Flow, Project, Token, TokenType, User
from ivrflow.repositories import ProjectRepository, TokenRepository, UserRepository
from ivrflow.schemas.flow import FlowCreate
from ivrflow.services.flow_service import FlowService, FlowSnapshot

TEST_PASSWORD = "correct-horse-battery"

# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests",
    )


# =============================================================================
# ASYNC ENGINE FIXTURES (SQLite In-Memory for Tests)
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an async SQLite in-memory engine for testing.

    All tables are created on setup and dropped on teardown.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def async_session_maker(
    async_engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the test engine."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# =============================================================================
# DATABASE SESSION FIXTURES WITH TRANSACTION ROLLBACK
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def db_session(
    async_session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Provide a database session with automatic rollback after each test.

    The fixture uses nested transactions (SAVEPOINT) so that commits made
    inside a test are still rolled back at the end.
    """
    async with async_session_maker() as session:
        session.begin_nested()

        # If the test calls session.commit(), restart the nested transaction
        @event.listens_for(session.sync_session, "after_transaction_end")
        def _restart_savepoint(session_sync: Session, transaction) -> None:
            if transaction.nested and not transaction._parent.nested:
                session_sync.expire_all()
                session_sync.begin_nested()

        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Registered user owning the sample data."""
    return await UserRepository(db_session).create(
        name="Ana Ops",
        email="ana@bank.example",
        hashed_password=hash_password(TEST_PASSWORD),
    )


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    """A second user who owns nothing of test_user's."""
    return await UserRepository(db_session).create(
        name="Victor Vendor",
        email="victor@vendor.example",
        hashed_password=hash_password(TEST_PASSWORD),
    )


@pytest.fixture
def project_factory(db_session: AsyncSession):
    """Factory for creating projects.

    Example:
        async def test_projects(project_factory, test_user):
            project = await project_factory(test_user, name="Bank IVR")
    """

    async def _create(owner: User, name: str = "Bank IVR", **kwargs) -> Project:
        return await ProjectRepository(db_session).create(
            user_id=owner.id, name=name, description=kwargs.get("description")
        )

    return _create


@pytest_asyncio.fixture
async def sample_project(project_factory, test_user: User) -> Project:
    return await project_factory(test_user, description="Retail banking line")


@pytest_asyncio.fixture
async def sample_flow_snapshot(
    db_session: AsyncSession,
    sample_project: Project,
) -> FlowSnapshot:
    """Freshly created flow holding only its seeded start node."""
    return await FlowService(db_session).create(
        sample_project, FlowCreate(name="Login", project_id=sample_project.id)
    )


@pytest_asyncio.fixture
async def sample_flow(sample_flow_snapshot: FlowSnapshot) -> Flow:
    return sample_flow_snapshot.flow


@pytest_asyncio.fixture
async def sample_token(db_session: AsyncSession, sample_project: Project) -> Token:
    return await TokenRepository(db_session).create(
        project_id=sample_project.id,
        name="Customer SSN",
        token_type=TokenType.SSN,
        format=r"^\d{3}-\d{2}-\d{4}$",
    )


@pytest.fixture
def auth_headers(test_user: User) -> dict[str, str]:
    """Bearer header carrying a real JWT for test_user."""
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture
def other_auth_headers(other_user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


# =============================================================================
# HTTP CLIENT FIXTURES
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def async_client(
    db_session: AsyncSession,
) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing API endpoints.

    Only the database dependency is overridden; authentication goes through
    real bearer tokens (see auth_headers).
    """
    from ivrflow.db.session import get_db

    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        """Override database dependency to use test session."""
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    try:
        transport = ASGITransport(app=cast("ASGIApp", app))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def async_client_auth(
    db_session: AsyncSession,
    test_user: User,
) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client with authentication override for testing.

    Overrides the CurrentUser dependency to return test_user without
    requiring JWT tokens.
    """
    from ivrflow.api.deps import get_current_user
    from ivrflow.db.session import get_db

    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        """Override database dependency to use test session."""
        yield db_session

    async def override_get_current_user() -> User:
        """Override authentication to return test user."""
        return test_user

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_get_current_user

    try:
        transport = ASGITransport(app=cast("ASGIApp", app))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
