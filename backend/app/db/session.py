"""
Async engine and session lifecycle.
The engine and sessionmaker are process-wide; sessions are per request.
"""

from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

engine: Optional[AsyncEngine] = None
async_session_maker: Optional[async_sessionmaker[AsyncSession]] = None


def _engine_options(url: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
    # SQLite has no connection pool to size
    if not url.startswith("sqlite"):
        options.update(pool_size=5, max_overflow=10)
    return options


def create_engine(url: Optional[str] = None) -> AsyncEngine:
    """Create the process engine for url (DATABASE_URL by default)."""
    global engine

    url = url or settings.DATABASE_URL
    engine = create_async_engine(url, **_engine_options(url))
    logger.info("Database engine created", extra={"dialect": engine.dialect.name})
    return engine


def create_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Create the process sessionmaker, creating the engine first if needed."""
    global async_session_maker

    async_session_maker = async_sessionmaker(
        engine or create_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )
    return async_session_maker


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a request session.
    Commits when the handler returns, rolls back if it raised.
    """
    session_maker = async_session_maker or create_sessionmaker()

    async with session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Set up engine and sessionmaker and create missing tables."""
    from app.db.init_db import create_tables

    if async_session_maker is None:
        create_sessionmaker()
    await create_tables(engine)
    logger.info("Database initialized")


async def close_db() -> None:
    """Dispose the engine; the next request recreates it."""
    global engine, async_session_maker

    if engine is not None:
        await engine.dispose()
        logger.info("Database connections closed")
    engine = None
    async_session_maker = None
