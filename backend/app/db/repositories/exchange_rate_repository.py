"""
Exchange rate repository for database operations.
"""

from typing import Iterable, List, Optional
import uuid
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite

from app.db.repositories.base_repository import BaseRepository
from app.models.exchange_rate import ExchangeRate

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class ExchangeRateRepository(BaseRepository[ExchangeRate]):
    """Repository for monthly exchange rate operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(ExchangeRate, session)

    async def get_rate(self, currency: str, month: int, year: int) -> Optional[ExchangeRate]:
        """Get the cached rate of a currency for a month."""
        return await self.find_one(currency=currency.upper(), month=month, year=year)

    async def has_month(self, month: int, year: int) -> bool:
        """True if the rate table of the month has been stored, for any currency."""
        return await self.find_one(month=month, year=year) is not None

    async def list_by_month(self, month: int, year: int) -> List[ExchangeRate]:
        """All cached rates of a month, ordered by currency."""
        result = await self.session.execute(
            select(ExchangeRate)
            .where(ExchangeRate.month == month, ExchangeRate.year == year)
            .order_by(ExchangeRate.currency)
        )
        return list(result.scalars().all())

    async def insert_many_ignore_existing(self, rows: Iterable[dict]) -> int:
        """
        Insert rates in one statement, skipping (currency, month, year)
        triples that already exist.

        Returns:
            Number of rows submitted
        """
        values = [{"id": uuid.uuid4(), **row} for row in rows]
        if not values:
            return 0

        dialect = self.session.get_bind().dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect)
        if insert is None:
            raise RuntimeError(f"Bulk insert is not supported for dialect {dialect}")

        statement = insert(ExchangeRate).values(values).on_conflict_do_nothing(
            index_elements=["currency", "month", "year"],
        )
        await self.session.execute(statement)
        await self.session.flush()
        return len(values)
