"""Database session management.

This module provides the async database engine and session factory using
SQLAlchemy 2.0 async patterns. The default backend is a file-backed SQLite
database; PostgreSQL is used through asyncpg when DATABASE_URL points to it.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ivrflow.core.config import settings
from ivrflow.core.logging import get_logger

logger = get_logger(__name__)


def _engine_kwargs() -> dict[str, Any]:
    # SQLite uses a static/null pool, so pool sizing options do not apply
    if settings.is_sqlite:
        return {"echo": settings.DATABASE_ECHO}
    return {
        "echo": settings.DATABASE_ECHO,
        "pool_pre_ping": True,
        "pool_size": settings.DATABASE_POOL_SIZE,
        "max_overflow": settings.DATABASE_MAX_OVERFLOW,
    }


engine: AsyncEngine = create_async_engine(settings.DATABASE_URL, **_engine_kwargs())

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency for FastAPI.

    One session per request. Commits on success, rolls back on exception,
    so multi-step operations such as cascading deletes apply all-or-nothing.

    Example:
        @router.get("/projects")
        async def list_projects(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_models(bind: AsyncEngine | None = None) -> None:
    """Create all tables that do not exist yet.

    Used at startup when AUTO_CREATE_TABLES is enabled. Production
    deployments should run the Alembic migrations instead.
    """
    from ivrflow.models import Base

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info(
        "Database tables ensured",
        extra={"context": {"action": "init_models", "tables": len(Base.metadata.tables)}},
    )


__all__ = [
    "async_session",
    "engine",
    "get_db",
    "init_models",
]
