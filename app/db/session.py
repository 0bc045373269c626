"""
Database session and engine configuration.

This file sets up the async database connection using SQLAlchemy + asyncpg.
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from typing import AsyncGenerator

from app.core.config import settings


# The connect timeout is the only timeout applied to the store; queries
# issued on an open connection are not bounded.
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    future=True,
    pool_pre_ping=True,
    connect_args={"timeout": settings.DB_CONNECT_TIMEOUT_SECONDS},
)

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
    
    The session commits when the request handler returns and rolls back
    when it raises, so a failed request never leaves partial writes behind.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

