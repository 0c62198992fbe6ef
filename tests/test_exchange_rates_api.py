"""
Exchange rate endpoint tests.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_convert_to_base_currency(test_client: AsyncClient, rate_source):
    response = await test_client.get(
        "/api/v1/exchange-rates/convert",
        params={"date": "2023-05-10T12:00:00Z", "amount": 125, "from_currency": "usd"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["from_currency"] == "USD"
    assert data["to_currency"] == "EUR"
    assert data["result"]["rate"] == 1.25
    assert data["result"]["amount"] == 100.0
    assert rate_source.calls == [(2023, 5)]


@pytest.mark.asyncio
async def test_convert_same_currency_has_no_result(test_client: AsyncClient, rate_source):
    response = await test_client.get(
        "/api/v1/exchange-rates/convert",
        params={"date": "2023-05-10T12:00:00Z", "amount": 10, "from_currency": "EUR", "to_currency": "eur"},
    )

    assert response.status_code == 200
    assert response.json()["result"] is None
    assert rate_source.calls == []


@pytest.mark.asyncio
async def test_convert_with_failing_source_has_no_result(test_client: AsyncClient, rate_source):
    rate_source.fail = True

    response = await test_client.get(
        "/api/v1/exchange-rates/convert",
        params={"date": "2023-05-10T12:00:00Z", "amount": 10, "from_currency": "USD"},
    )

    assert response.status_code == 200
    assert response.json()["result"] is None


@pytest.mark.asyncio
async def test_convert_rejects_negative_amount(test_client: AsyncClient):
    response = await test_client.get(
        "/api/v1/exchange-rates/convert",
        params={"date": "2023-05-10T12:00:00Z", "amount": -1, "from_currency": "USD"},
    )

    assert response.status_code == 422
    assert response.json()["error"]["message"] == "Validation error"


@pytest.mark.asyncio
async def test_list_rates_of_fetched_month(test_client: AsyncClient, rate_source):
    empty = await test_client.get("/api/v1/exchange-rates", params={"month": 5, "year": 2023})
    assert empty.json() == {"items": [], "total": 0}

    await test_client.get(
        "/api/v1/exchange-rates/convert",
        params={"date": "2023-05-10T12:00:00Z", "amount": 1, "from_currency": "GBP"},
    )
    response = await test_client.get("/api/v1/exchange-rates", params={"month": 5, "year": 2023})

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == len(rate_source.rates)
    assert {item["currency"] for item in data["items"]} == set(rate_source.rates)
    assert all(item["month"] == 5 and item["year"] == 2023 for item in data["items"])


@pytest.mark.asyncio
async def test_list_rates_validates_month(test_client: AsyncClient):
    response = await test_client.get("/api/v1/exchange-rates", params={"month": 13, "year": 2023})

    assert response.status_code == 422
