"""
Exchange rate controller.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.core.integrations.inforeuro import MonthlyRateSource
from app.services.exchange_rate_service import ExchangeRateService
from app.schemas.exchange_rate import (
    ConversionResponse,
    ConversionResultResponse,
    ExchangeRateListResponse,
)


class ExchangeRateController(BaseController):
    """Controller for exchange rate operations."""

    def __init__(self, session: AsyncSession, rate_source: MonthlyRateSource):
        super().__init__(session, rate_source)
        self.exchange_rate_service = ExchangeRateService(session, rate_source)

    async def convert(
        self,
        date: datetime,
        amount: float,
        from_currency: str,
        to_currency: Optional[str] = None,
    ) -> ConversionResponse:
        """Convert an amount; an unavailable conversion yields result=None."""
        to_currency = (to_currency or self.exchange_rate_service.base_currency).upper()
        result = await self.exchange_rate_service.convert(date, amount, from_currency, to_currency)
        return ConversionResponse(
            from_currency=from_currency.upper(),
            to_currency=to_currency,
            result=ConversionResultResponse.model_validate(result) if result else None,
        )

    async def list_rates(self, month: int, year: int) -> ExchangeRateListResponse:
        """List the cached rates of a month."""
        return await self.exchange_rate_service.list_rates(month, year)
