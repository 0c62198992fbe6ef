"""
Exchange rate service: converts amounts using monthly rates cached in the
database and fetched from the rate source the first time a month is needed.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.integrations.inforeuro import MonthlyRateSource, MonthlyRate
from app.db.repositories.exchange_rate_repository import ExchangeRateRepository
from app.schemas.exchange_rate import ExchangeRateResponse, ExchangeRateListResponse
from app.services.base_service import BaseService
from app.utils.currency_converter import convert_to_base
from app.utils.date_utils import DateLike, to_utc_datetime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a performed conversion."""
    date: datetime
    rate: float
    amount: float


class ExchangeRateService(BaseService):
    """Service for currency conversion with a monthly rate cache."""

    def __init__(
        self,
        session: AsyncSession,
        rate_source: MonthlyRateSource,
        base_currency: Optional[str] = None,
    ):
        super().__init__(session)
        self.exchange_rate_repo = ExchangeRateRepository(session)
        self.rate_source = rate_source
        self.base_currency = (base_currency or settings.BASE_CURRENCY).upper()

    async def convert(
        self,
        date: DateLike,
        amount: float,
        from_currency: str,
        to_currency: Optional[str] = None,
    ) -> Optional[ConversionResult]:
        """
        Convert an amount in from_currency into the base currency.

        Rates are monthly, so only the month of the date matters. Dates in
        the future are replaced by now. to_currency only decides whether a
        conversion is needed at all; rates are always against the base
        currency.

        Returns:
            The conversion, or None if the currencies are equal, the currency
            is not published for that month, or the rate source failed.
        """
        from_currency = from_currency.upper()
        to_currency = (to_currency or self.base_currency).upper()
        if from_currency == to_currency:
            return None

        conversion_date = to_utc_datetime(date)
        now = datetime.now(timezone.utc)
        if conversion_date > now:
            conversion_date = now
        month = conversion_date.month
        year = conversion_date.year

        rate = await self._resolve_rate(from_currency, month, year)
        if rate is None:
            return None

        return ConversionResult(
            date=conversion_date,
            rate=rate,
            amount=convert_to_base(amount, rate),
        )

    async def _resolve_rate(self, currency: str, month: int, year: int) -> Optional[float]:
        cached = await self.exchange_rate_repo.get_rate(currency, month, year)
        if cached is not None:
            return cached.value

        if await self.exchange_rate_repo.has_month(month, year):
            logger.info(
                "No rate published for currency",
                extra={"currency": currency, "month": month, "year": year},
            )
            return None

        rates = await self._fetch_and_store_month(month, year)
        if rates is None:
            return None

        match = next((r for r in rates if r.currency == currency), None)
        if match is None:
            logger.info(
                "Fetched rate table lacks currency",
                extra={"currency": currency, "month": month, "year": year},
            )
            return None
        return match.value

    async def _fetch_and_store_month(self, month: int, year: int) -> Optional[List[MonthlyRate]]:
        """Fetch a month's rate table and store it; the fetched entries are returned as is."""
        logger.info("Fetching monthly rate table", extra={"month": month, "year": year})
        rates = await self.rate_source.fetch_monthly_rates(year, month)
        if rates is None:
            return None

        rows = {}
        for rate in rates:
            # First entry wins when several countries share a currency
            rows.setdefault(
                rate.currency,
                {
                    "currency": rate.currency,
                    "month": month,
                    "year": year,
                    "value": rate.value,
                    "country": rate.country,
                },
            )
        await self.exchange_rate_repo.insert_many_ignore_existing(rows.values())
        return rates

    async def list_rates(self, month: int, year: int) -> ExchangeRateListResponse:
        """List the cached rates of a month."""
        rates = await self.exchange_rate_repo.list_by_month(month, year)
        return ExchangeRateListResponse(
            items=[ExchangeRateResponse.model_validate(r) for r in rates],
            total=len(rates),
        )
