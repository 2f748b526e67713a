"""
Database connection and session management for PostgreSQL.

Provides the declarative base, lazily-created engines and session factories,
and the request-scoped session dependency for FastAPI endpoints.
"""

from collections.abc import AsyncGenerator

from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from fieldcrm.db.config import get_db_settings
from fieldcrm.utils.logger import logger


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


_async_engine = None
_async_session_local = None
_sync_engine = None


def get_async_engine():
    """Get or create the async database engine."""
    global _async_engine
    if _async_engine is None:
        settings = get_db_settings()
        _async_engine = create_async_engine(
            settings.get_async_url(),
            echo=settings.echo,
            pool_pre_ping=True,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
        )
    return _async_engine


def get_async_session_local():
    """Get or create the async session factory."""
    global _async_session_local
    if _async_session_local is None:
        _async_session_local = async_sessionmaker(
            bind=get_async_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _async_session_local


def get_sync_engine():
    """Get or create the sync database engine (for Alembic migrations)."""
    global _sync_engine
    if _sync_engine is None:
        settings = get_db_settings()
        _sync_engine = create_engine(
            settings.get_sync_url(),
            echo=settings.echo,
            pool_pre_ping=True,
        )
    return _sync_engine


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Commits when the request handler returns and rolls back if it raises.

    Yields:
        AsyncSession: Database session for use in endpoints
    """
    session_local = get_async_session_local()
    async with session_local() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def close_db() -> None:
    """
    Dispose of the async engine.

    Call this on application shutdown.
    """
    global _async_engine, _async_session_local
    if _async_engine is None:
        return
    logger.info("Closing database connections...")
    await _async_engine.dispose()
    _async_engine = None
    _async_session_local = None
    logger.info("Database connections closed")
