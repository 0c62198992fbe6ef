"""
Travel endpoint tests.
"""

from uuid import uuid4

import pytest
from httpx import AsyncClient


def travel_body(**overrides) -> dict:
    body = {
        "name": "Workshop",
        "traveler_id": str(uuid4()),
        "editor_id": str(uuid4()),
        "reason": "Project workshop",
        "destination_place": "London",
        "travel_inside_of_eu": False,
        "start_date": "2024-03-01",
        "end_date": "2024-03-02",
        "advance_amount": 50,
        "advance_currency": "EUR",
        "records": [
            {
                "type": "route",
                "start_date": "2024-03-01T07:00:00Z",
                "end_date": "2024-03-01T09:00:00Z",
                "start_location": "Berlin",
                "end_location": "London",
                "transport": "airplane",
                "purpose": "professional",
                "cost_amount": 160,
                "cost_currency": "GBP",
            },
            {
                "type": "stay",
                "start_date": "2024-03-01T10:00:00Z",
                "end_date": "2024-03-02T18:00:00Z",
                "location": "London",
                "purpose": "professional",
            },
        ],
    }
    body.update(overrides)
    return body


async def create_travel(client: AsyncClient, **overrides) -> dict:
    response = await client.post("/api/v1/travels", json=travel_body(**overrides))
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_create_and_get_travel(test_client: AsyncClient):
    created = await create_travel(test_client)

    assert created["state"] == "appliedFor"
    assert created["records"][0]["exchange_rate_amount"] == 200.0
    assert [d["date"] for d in created["catering_no_refund"]] == ["2024-03-01", "2024-03-02"]

    response = await test_client.get(f"/api/v1/travels/{created['id']}")
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]


@pytest.mark.asyncio
async def test_get_unknown_travel(test_client: AsyncClient):
    response = await test_client.get(f"/api/v1/travels/{uuid4()}")

    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Travel not found"


@pytest.mark.asyncio
async def test_create_rejects_end_before_start(test_client: AsyncClient):
    response = await test_client.post(
        "/api/v1/travels",
        json=travel_body(start_date="2024-03-02", end_date="2024-03-01"),
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_rejects_records_out_of_order(test_client: AsyncClient):
    body = travel_body()
    body["records"].reverse()

    response = await test_client.post("/api/v1/travels", json=body)

    assert response.status_code == 400
    assert "starts before the previous record" in response.json()["error"]["message"]


@pytest.mark.asyncio
async def test_transitions_build_history(test_client: AsyncClient):
    travel = await create_travel(test_client)
    travel_id = travel["id"]

    approved = await test_client.post(f"/api/v1/travels/{travel_id}/approve", json={"comment": "Go ahead"})
    assert approved.status_code == 200
    assert approved.json()["state"] == "approved"
    assert approved.json()["comment"] == "Go ahead"

    examined = await test_client.post(f"/api/v1/travels/{travel_id}/submit-for-examination")
    assert examined.status_code == 200
    assert examined.json()["comment"] is None

    history = await test_client.get(f"/api/v1/travels/{travel_id}/history")
    assert history.status_code == 200
    states = [h["state"] for h in history.json()]
    assert states == ["appliedFor", "approved"]
    assert all(h["historic"] for h in history.json())
    assert examined.json()["history"] == [h["id"] for h in history.json()]


@pytest.mark.asyncio
async def test_transition_from_wrong_state(test_client: AsyncClient):
    travel = await create_travel(test_client)

    response = await test_client.post(f"/api/v1/travels/{travel['id']}/refund")

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Cannot refund a travel in state appliedFor"


@pytest.mark.asyncio
async def test_reject_travel(test_client: AsyncClient):
    travel = await create_travel(test_client)

    response = await test_client.post(f"/api/v1/travels/{travel['id']}/reject", json={"comment": "Too expensive"})

    assert response.status_code == 200
    assert response.json()["state"] == "rejected"


@pytest.mark.asyncio
async def test_update_records_and_catering_days(test_client: AsyncClient):
    travel = await create_travel(test_client)
    travel_id = travel["id"]

    catering = await test_client.put(
        f"/api/v1/travels/{travel_id}/catering-no-refund",
        json=[{"date": "2024-03-01", "breakfast": True}],
    )
    assert catering.status_code == 200
    assert catering.json()["catering_no_refund"][0]["breakfast"] is True

    records = travel_body()["records"][:1]
    response = await test_client.put(f"/api/v1/travels/{travel_id}/records", json=records)

    assert response.status_code == 200
    data = response.json()
    assert len(data["records"]) == 1
    assert data["catering_no_refund"] == [
        {"date": "2024-03-01", "breakfast": True, "lunch": False, "dinner": False}
    ]


@pytest.mark.asyncio
async def test_catering_day_outside_travel(test_client: AsyncClient):
    travel = await create_travel(test_client)

    response = await test_client.put(
        f"/api/v1/travels/{travel['id']}/catering-no-refund",
        json=[{"date": "2024-05-01", "dinner": True}],
    )

    assert response.status_code == 400
    assert response.json()["error"]["details"] == ["2024-05-01"]


@pytest.mark.asyncio
async def test_list_travels(test_client: AsyncClient):
    await create_travel(test_client)
    second = await create_travel(test_client, name="Second")
    await test_client.post(f"/api/v1/travels/{second['id']}/approve")

    response = await test_client.get("/api/v1/travels")
    approved = await test_client.get("/api/v1/travels", params={"state": "approved"})

    assert response.json()["total"] == 2
    assert approved.json()["total"] == 1
    assert approved.json()["items"][0]["name"] == "Second"


@pytest.mark.asyncio
async def test_export_travels_as_tsv(test_client: AsyncClient):
    travel = await create_travel(test_client)

    response = await test_client.get("/api/v1/travels/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/tab-separated-values")
    header, row = response.text.strip("\n").split("\n")
    assert header.split("\t")[:3] == ["id", "name", "state"]
    assert row.split("\t")[:3] == [travel["id"], "Workshop", "appliedFor"]


@pytest.mark.asyncio
async def test_travel_report_is_xlsx(test_client: AsyncClient):
    travel = await create_travel(test_client)

    response = await test_client.get(f"/api/v1/travels/{travel['id']}/report")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert response.content[:2] == b"PK"


@pytest.mark.asyncio
async def test_report_of_unknown_travel(test_client: AsyncClient):
    response = await test_client.get(f"/api/v1/travels/{uuid4()}/report")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_travel(test_client: AsyncClient):
    travel = await create_travel(test_client)
    await test_client.post(f"/api/v1/travels/{travel['id']}/approve")

    response = await test_client.delete(f"/api/v1/travels/{travel['id']}")
    assert response.status_code == 204

    missing = await test_client.get(f"/api/v1/travels/{travel['id']}")
    assert missing.status_code == 404
    again = await test_client.delete(f"/api/v1/travels/{travel['id']}")
    assert again.status_code == 404
