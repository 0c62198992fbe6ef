"""
Health repository: checks used by the health endpoint.
"""

from typing import Optional, Tuple

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exchange_rate import ExchangeRate


class HealthRepository:
    """Read-only queries for health reporting."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def check_database(self) -> bool:
        """True if a trivial query succeeds."""
        try:
            result = await self.session.execute(text("SELECT 1"))
            return result.scalar() == 1
        except (SQLAlchemyError, OSError):
            return False

    async def latest_rate_month(self) -> Optional[Tuple[int, int]]:
        """(year, month) of the newest cached rate table, None if the cache is empty."""
        result = await self.session.execute(
            select(ExchangeRate.year, ExchangeRate.month)
            .order_by(ExchangeRate.year.desc(), ExchangeRate.month.desc())
            .limit(1)
        )
        row = result.first()
        return (row.year, row.month) if row else None
