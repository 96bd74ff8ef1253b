"""
Database session and engine configuration.

This file sets up the async database connection using SQLAlchemy.
PostgreSQL runs on asyncpg; tests point DATABASE_URL at aiosqlite.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from logitrack.core.config import settings


# Create the async database engine
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,  # When DEBUG=True, prints SQL queries to console
    future=True,
)

# Create a session factory
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Keeps data accessible after commit
)

# Alias for dependencies
AsyncSessionLocal = async_session_maker


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Get a database session.

    This is used by FastAPI to provide a database connection to your API endpoints.
    The session is rolled back if the request fails and always closed afterwards.

    Usage in a FastAPI endpoint:
        @app.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def get_async_session_context() -> AsyncGenerator[AsyncSession, None]:
    """Context manager helper for async DB sessions (used in scripts)."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
