"""
Client for the European Commission InforEuro monthly accounting rates.

The endpoint returns one entry per country:
    [{"country": "United States", "currency": "US dollar", "isoA3Code": "USD",
      "isoA2Code": "US", "value": 1.0852, "comment": null}, ...]
where value is the number of currency units per 1 EUR.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

import aiohttp

from app.core.config import settings
from app.core.integrations.http.http_client import HttpClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthlyRate:
    """One currency's rate for one month as published by the rate source."""
    country: Optional[str]
    currency: str
    value: float


class MonthlyRateSource(Protocol):
    """Anything able to produce the monthly rate table for (year, month)."""

    async def fetch_monthly_rates(self, year: int, month: int) -> Optional[List[MonthlyRate]]: ...


class InforEuroClient:
    """Fetches monthly rate tables. A single attempt is made per call."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        language: Optional[str] = None,
        timeout: Optional[int] = None,
        http_client: Optional[HttpClient] = None,
    ):
        self.language = language or settings.EXCHANGE_RATE_API_LANGUAGE
        self.http_client = http_client or HttpClient(
            base_url=base_url or settings.EXCHANGE_RATE_API_URL,
            timeout=timeout or settings.EXCHANGE_RATE_API_TIMEOUT,
            max_retries=1,
        )

    async def close(self) -> None:
        await self.http_client.close()

    async def fetch_monthly_rates(self, year: int, month: int) -> Optional[List[MonthlyRate]]:
        """
        Fetch the rate table of a month.

        Returns:
            The parsed rates, or None when the request fails or the body is
            not the expected list of rate entries.
        """
        params = {"lang": self.language, "year": year, "month": month}
        try:
            payload = await self.http_client.get(params=params)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.warning(
                f"Fetching monthly rates failed: {e}",
                extra={"year": year, "month": month},
            )
            return None

        rates = parse_monthly_rates(payload)
        if rates is None:
            logger.warning(
                "Rate source returned a malformed body",
                extra={"year": year, "month": month},
            )
            return None

        logger.info(
            f"Fetched {len(rates)} monthly rates",
            extra={"year": year, "month": month},
        )
        return rates


def parse_monthly_rates(payload) -> Optional[List[MonthlyRate]]:
    """Turn the raw JSON body into MonthlyRate entries; None if malformed."""
    if not isinstance(payload, list):
        return None

    rates: List[MonthlyRate] = []
    for entry in payload:
        if not isinstance(entry, dict):
            return None
        code = entry.get("isoA3Code")
        value = entry.get("value")
        if not isinstance(code, str) or isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if value <= 0:
            continue
        rates.append(
            MonthlyRate(
                country=entry.get("country"),
                currency=code.strip().upper(),
                value=float(value),
            )
        )
    return rates
