"""
Exchange rate Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID


class ExchangeRateResponse(BaseModel):
    """Response schema for a cached monthly exchange rate."""
    id: UUID
    currency: str = Field(..., min_length=3, max_length=3, description="ISO 4217 currency code (e.g., USD)")
    month: int = Field(..., ge=1, le=12)
    year: int
    value: float = Field(..., gt=0, description="Units of this currency per 1 unit of the base currency")
    country: Optional[str] = None

    class Config:
        from_attributes = True


class ExchangeRateListResponse(BaseModel):
    """Schema for exchange rate list response."""
    items: List[ExchangeRateResponse]
    total: int


class ConversionResultResponse(BaseModel):
    """A performed conversion."""
    date: datetime = Field(..., description="Date whose monthly rate was used (never in the future)")
    rate: float
    amount: float = Field(..., description="Converted amount in the base currency, rounded to cents")

    class Config:
        from_attributes = True


class ConversionResponse(BaseModel):
    """Wrapper so that an unavailable conversion is an explicit null, not an error."""
    from_currency: str
    to_currency: str
    result: Optional[ConversionResultResponse] = None
