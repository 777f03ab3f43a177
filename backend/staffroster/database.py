"""
StaffRoster Backend: Database Engine & Session Management
===========================================================

What:  Async SQLAlchemy engine factory, session factory and declarative base.
Why:   Centralizes all database connection logic in one place.
How:   Builds an async engine from settings; the application lifespan owns
       the engine and hands a session factory to the record store.
Who:   Called by main.lifespan, the Alembic environment and the test suite.
When:  Engine is created at startup; sessions are opened per store call.

Lifecycle:
    There is no module-level engine. The process bootstrap (lifespan)
    creates it, injects it into SQLAlchemyRecordStore and disposes it on
    shutdown, so tests can build an isolated engine per test.

Connection Pooling Strategy:
    pool_size / max_overflow / pool_pre_ping apply to server databases
    (PostgreSQL). SQLite uses SQLAlchemy's default pool for its dialect,
    which does not accept those arguments.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from staffroster.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, used by Alembic for migrations and by
    create_tables() for development setups.
    """
    pass


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Build the async engine for the configured database URL.

    Args:
        settings: Application settings (database_url, pool options, log_level)

    Returns:
        AsyncEngine; the caller owns it and must dispose it.
    """
    kwargs = {
        # Echo SQL in DEBUG mode only; it is noisy
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,  # Recycle after 1 hour to prevent stale connections
        )
    return create_async_engine(settings.database_url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to the engine.

    expire_on_commit=False: ORM objects stay readable after commit, which the
    store relies on when converting rows to Employee records.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create any missing tables registered on Base.metadata."""
    # Import models so they register with Base before create_all
    from staffroster.models import employee  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
