"""Async engine and session scopes for request handlers and scripts."""

import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from directory_api.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

engine = create_async_engine(
    settings.async_database_url,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
    pool_pre_ping=True,
    pool_recycle=settings.database_pool_recycle_seconds,
    # Statements carry password hashes
    echo=False,
    # Shows up in pg_stat_activity
    connect_args={"server_settings": {"application_name": settings.app_name}},
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Open a session that commits on exit and rolls back on database errors.

    Services may commit earlier themselves; the final commit is then a no-op.

    Yields:
        AsyncSession bound to the shared engine

    Raises:
        SQLAlchemyError: Re-raised after the rollback
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as e:
            logger.warning("Rolling back session after %s", type(e).__name__)
            await session.rollback()
            raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async with session_scope() as session:
        yield session
