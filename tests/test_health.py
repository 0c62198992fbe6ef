"""
Health endpoint tests using pytest-asyncio and httpx.AsyncClient.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_endpoint(test_client: AsyncClient):
    """Test the health check endpoint returns expected structure."""
    response = await test_client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()

    assert data["status"] == "ok"
    assert data["uptime"].startswith("PT")
    assert data["checks"] == {"database": "ok"}
    assert data["base_currency"] == "EUR"
    assert data["latest_rate_month"] is None


@pytest.mark.asyncio
async def test_health_reports_newest_cached_month(test_client: AsyncClient):
    for day in ("2023-11-02", "2024-02-15"):
        await test_client.get(
            "/api/v1/exchange-rates/convert",
            params={"date": f"{day}T00:00:00Z", "amount": 1, "from_currency": "USD"},
        )

    response = await test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["latest_rate_month"] == "2024-02"
