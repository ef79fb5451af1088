"""
Database session and engine configuration.

This file sets up the async database connection using SQLAlchemy.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from hiring_dashboard.core.config import settings
from hiring_dashboard.errors import TransactionError

logger = logging.getLogger(__name__)


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    future=True,
)

# expire_on_commit=False keeps returned entities readable after the
# service layer commits
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Alias for dependencies
AsyncSessionLocal = async_session_maker


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Get a database session.

    Services commit their own units of work; anything left pending when
    the request fails is rolled back here.

    Usage in a FastAPI endpoint:
        @router.get("/jobs")
        async def list_jobs(db: AsyncSession = Depends(get_db)):
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
async def atomic(db: AsyncSession, action: str) -> AsyncGenerator[AsyncSession, None]:
    """
    Run a block of writes as one unit of work.

    Commits when the block finishes. Any failure rolls the whole block
    back; database failures surface as TransactionError, everything else
    is re-raised unchanged.

    Usage:
        async with atomic(self.db, "transition candidate stage"):
            ...
    """
    try:
        yield db
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Failed to %s: %s", action, exc)
        raise TransactionError(f"Failed to {action}") from exc
    except Exception:
        await db.rollback()
        raise
