"""
Exchange rate model: one currency's rate against the base currency for one month.
"""

from sqlalchemy import Column, String, Float, Integer, UniqueConstraint, Index
from sqlalchemy.dialects.postgresql import UUID
import uuid

from app.db.base import Base


class ExchangeRate(Base):
    """Monthly exchange rate: value units of currency per 1 unit of the base currency."""

    __tablename__ = "exchange_rates"
    __table_args__ = (
        UniqueConstraint("currency", "month", "year", name="uq_exchange_rate_currency_month_year"),
        Index("ix_exchange_rates_year_month", "year", "month"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    currency = Column(String(3), nullable=False, index=True)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    value = Column(Float, nullable=False)
    country = Column(String(255), nullable=True)

    def __repr__(self):
        return f"<ExchangeRate(currency={self.currency}, {self.year}-{self.month:02d}, value={self.value})>"
