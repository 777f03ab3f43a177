"""
Alembic Migration Environment
===============================

Runs StaffRoster migrations online against settings.database_url, using an
async engine bridged through connection.run_sync(). Offline SQL generation
is not supported.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context

from staffroster.config import settings
from staffroster.database import Base
from staffroster.models.employee import Employee  # noqa: F401  registers the table

if context.config.config_file_name is not None:
    fileConfig(context.config.config_file_name)


def _migrate(connection) -> None:
    context.configure(connection=connection, target_metadata=Base.metadata)
    with context.begin_transaction():
        context.run_migrations()


async def _run() -> None:
    engine = create_async_engine(settings.database_url, poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(_migrate)
    await engine.dispose()


if context.is_offline_mode():
    raise SystemExit("Offline migrations are not supported; run without --sql.")

asyncio.run(_run())
