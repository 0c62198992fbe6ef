"""
Database bootstrapping: table creation for all registered models.
"""

from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.base import Base
from app.core.logging import get_logger

# Registers every model on Base.metadata
import app.models  # noqa: F401

logger = get_logger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all missing database tables. Existing tables are left untouched.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info(
        "Database tables initialized",
        extra={"tables": sorted(Base.metadata.tables.keys())},
    )
