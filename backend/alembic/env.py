"""Migration runner for the IVR Flow Studio schema.

The target database comes from ``sqlalchemy.url`` when the caller sets it
on the Alembic config, otherwise from ivrflow settings (DATABASE_URL).
Online runs go through an async engine, so the same aiosqlite or asyncpg
URL the application uses works here unchanged.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context
from ivrflow.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def database_url() -> str:
    url = config.get_main_option("sqlalchemy.url")
    if url:
        return url

    from ivrflow.core.config import settings

    return settings.DATABASE_URL


def configure(**options) -> None:
    # SQLite cannot ALTER most columns in place; batch mode recreates the table
    context.configure(
        target_metadata=Base.metadata,
        render_as_batch=database_url().startswith("sqlite"),
        **options,
    )
    with context.begin_transaction():
        context.run_migrations()


def migrate_connection(connection: Connection) -> None:
    configure(connection=connection)


async def migrate_online() -> None:
    section = config.get_section(config.config_ini_section) or {}
    section["sqlalchemy.url"] = database_url()
    engine = async_engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    try:
        async with engine.connect() as connection:
            await connection.run_sync(migrate_connection)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    configure(url=database_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
else:
    asyncio.run(migrate_online())
