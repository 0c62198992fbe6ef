"""
Exchange rate API endpoints.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.deps.di_container import get_rate_source
from app.controllers.exchange_rate_controller import ExchangeRateController
from app.core.integrations.inforeuro import MonthlyRateSource
from app.schemas.exchange_rate import ConversionResponse, ExchangeRateListResponse

router = APIRouter()


@router.get("/convert", response_model=ConversionResponse)
async def convert_amount(
    date: datetime = Query(..., description="Date of the expense; only its month is used"),
    amount: float = Query(..., ge=0),
    from_currency: str = Query(..., min_length=3, max_length=3),
    to_currency: Optional[str] = Query(None, min_length=3, max_length=3),
    db: AsyncSession = Depends(get_db),
    rate_source: MonthlyRateSource = Depends(get_rate_source),
) -> ConversionResponse:
    """Convert an amount into the base currency using the monthly rate."""
    controller = ExchangeRateController(db, rate_source)
    return await controller.convert(date, amount, from_currency, to_currency)


@router.get("", response_model=ExchangeRateListResponse)
async def list_exchange_rates(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1900, le=9999),
    db: AsyncSession = Depends(get_db),
    rate_source: MonthlyRateSource = Depends(get_rate_source),
) -> ExchangeRateListResponse:
    """List the cached rates of a month."""
    controller = ExchangeRateController(db, rate_source)
    return await controller.list_rates(month, year)
