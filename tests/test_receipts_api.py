"""
Receipt upload and attachment tests.
"""

import io
from datetime import date, timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient
from openpyxl import load_workbook

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
PDF = b"%PDF-1.4\n%receipt\n"


async def upload(client: AsyncClient, owner_id: str, name="ticket.png", content=PNG, content_type="image/png"):
    return await client.post(
        "/api/v1/files",
        data={"owner_id": owner_id},
        files={"file": (name, content, content_type)},
    )


def travel_body(traveler_id: str, receipt_ids=(), cost_date="2024-03-01") -> dict:
    return {
        "name": "Fair",
        "traveler_id": traveler_id,
        "editor_id": traveler_id,
        "reason": "Trade fair",
        "destination_place": "Hannover",
        "travel_inside_of_eu": True,
        "start_date": "2024-03-01",
        "end_date": "2024-03-01",
        "advance_currency": "EUR",
        "records": [
            {
                "type": "route",
                "start_date": "2024-03-01T07:00:00Z",
                "end_date": "2024-03-01T09:00:00Z",
                "start_location": "Berlin",
                "end_location": "Hannover",
                "transport": "otherTransport",
                "purpose": "professional",
                "cost_amount": 79.9,
                "cost_currency": "EUR",
                "cost_date": cost_date,
                "receipt_ids": list(receipt_ids),
            },
        ],
    }


@pytest.mark.asyncio
async def test_upload_and_download_receipt(test_client: AsyncClient):
    owner_id = str(uuid4())

    response = await upload(test_client, owner_id)
    assert response.status_code == 201
    stored = response.json()
    assert stored["name"] == "ticket.png"
    assert stored["type"] == "image/png"
    assert stored["size"] == len(PNG)
    assert stored["owner_id"] == owner_id

    info = await test_client.get(f"/api/v1/files/{stored['id']}/info")
    assert info.status_code == 200
    assert info.json()["id"] == stored["id"]

    download = await test_client.get(f"/api/v1/files/{stored['id']}")
    assert download.status_code == 200
    assert download.headers["content-type"] == "image/png"
    assert "ticket.png" in download.headers["content-disposition"]
    assert download.content == PNG


@pytest.mark.asyncio
async def test_upload_rejects_unsupported_type(test_client: AsyncClient):
    response = await upload(test_client, str(uuid4()), name="notes.txt", content=b"hello", content_type="text/plain")

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["details"]["allowed_types"] == ["image/jpeg", "image/png", "application/pdf"]


@pytest.mark.asyncio
async def test_upload_rejects_empty_file(test_client: AsyncClient):
    response = await upload(test_client, str(uuid4()), name="scan.pdf", content=b"", content_type="application/pdf")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_download_unknown_file(test_client: AsyncClient):
    response = await test_client.get(f"/api/v1/files/{uuid4()}")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_record_lists_receipts_of_the_traveler(test_client: AsyncClient):
    traveler_id = str(uuid4())
    own = (await upload(test_client, traveler_id)).json()
    foreign = (await upload(test_client, str(uuid4()), name="other.png")).json()

    response = await test_client.post(
        "/api/v1/travels",
        json=travel_body(traveler_id, receipt_ids=[own["id"], foreign["id"], str(uuid4())]),
    )

    assert response.status_code == 201
    record = response.json()["records"][0]
    assert record["cost_date"] == "2024-03-01"
    assert record["receipts"] == [{"id": own["id"], "name": "ticket.png", "type": "image/png"}]


@pytest.mark.asyncio
async def test_future_cost_date_is_rejected(test_client: AsyncClient):
    tomorrow = (date.today() + timedelta(days=2)).isoformat()

    response = await test_client.post("/api/v1/travels", json=travel_body(str(uuid4()), cost_date=tomorrow))

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_attach_receipts_to_record(test_client: AsyncClient):
    traveler_id = str(uuid4())
    travel = (await test_client.post("/api/v1/travels", json=travel_body(traveler_id))).json()
    record_id = travel["records"][0]["id"]
    ticket = (await upload(test_client, traveler_id)).json()
    invoice = (await upload(test_client, traveler_id, name="invoice.pdf", content=PDF, content_type="application/pdf")).json()

    first = await test_client.post(
        f"/api/v1/travels/{travel['id']}/records/{record_id}/receipts",
        json={"receipt_ids": [ticket["id"]]},
    )
    assert first.status_code == 200

    second = await test_client.post(
        f"/api/v1/travels/{travel['id']}/records/{record_id}/receipts",
        json={"receipt_ids": [ticket["id"], invoice["id"]]},
    )
    assert second.status_code == 200
    names = [r["name"] for r in second.json()["records"][0]["receipts"]]
    assert names == ["ticket.png", "invoice.pdf"]

    stored = await test_client.get(f"/api/v1/travels/{travel['id']}")
    assert len(stored.json()["records"][0]["receipts"]) == 2


@pytest.mark.asyncio
async def test_attach_receipts_to_unknown_record(test_client: AsyncClient):
    traveler_id = str(uuid4())
    travel = (await test_client.post("/api/v1/travels", json=travel_body(traveler_id))).json()
    ticket = (await upload(test_client, traveler_id)).json()

    response = await test_client.post(
        f"/api/v1/travels/{travel['id']}/records/{uuid4()}/receipts",
        json={"receipt_ids": [ticket["id"]]},
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_history_copies_keep_receipts(test_client: AsyncClient):
    traveler_id = str(uuid4())
    ticket = (await upload(test_client, traveler_id)).json()
    travel = (await test_client.post("/api/v1/travels", json=travel_body(traveler_id, receipt_ids=[ticket["id"]]))).json()

    await test_client.post(f"/api/v1/travels/{travel['id']}/approve")
    history = (await test_client.get(f"/api/v1/travels/{travel['id']}/history")).json()

    assert [r["id"] for r in history[0]["records"][0]["receipts"]] == [ticket["id"]]
    assert history[0]["records"][0]["id"] != travel["records"][0]["id"]


@pytest.mark.asyncio
async def test_deleting_travel_keeps_files(test_client: AsyncClient):
    traveler_id = str(uuid4())
    ticket = (await upload(test_client, traveler_id)).json()
    travel = (await test_client.post("/api/v1/travels", json=travel_body(traveler_id, receipt_ids=[ticket["id"]]))).json()
    await test_client.post(f"/api/v1/travels/{travel['id']}/approve")

    deleted = await test_client.delete(f"/api/v1/travels/{travel['id']}")
    assert deleted.status_code == 204

    download = await test_client.get(f"/api/v1/files/{ticket['id']}")
    assert download.status_code == 200


@pytest.mark.asyncio
async def test_report_lists_receipt_names(test_client: AsyncClient):
    traveler_id = str(uuid4())
    ticket = (await upload(test_client, traveler_id)).json()
    travel = (await test_client.post("/api/v1/travels", json=travel_body(traveler_id, receipt_ids=[ticket["id"]]))).json()

    response = await test_client.get(f"/api/v1/travels/{travel['id']}/report")

    assert response.status_code == 200
    ws = load_workbook(io.BytesIO(response.content))["Records"]
    headers = [cell.value for cell in ws[1]]
    assert headers[-1] == "Receipts"
    assert ws.cell(row=2, column=len(headers)).value == "ticket.png"
    assert ws.cell(row=2, column=headers.index("Cost date") + 1).value is not None
