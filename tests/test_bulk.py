from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from inventory.core import rate_limit
from inventory.core.rate_limit import RateLimitPolicy

YEAR = datetime.now(timezone.utc).year % 100


def _bulk_payload(**overrides) -> dict:
    payload = {
        "assetCodePrefix": "LAP",
        "assetName": "Dell Latitude 5440",
        "category": "Computing",
        "brand": "Dell",
        "serialNumberPrefix": "BATCH",
        "quantity": 3,
        "status": "Stock",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_bulk_create(client: AsyncClient, auth_headers: dict):
    response = await client.post("/api/v1/assets/bulk", json=_bulk_payload(), headers=auth_headers)
    assert response.status_code == 200, response.text
    result = response.json()
    assert result["totalRequested"] == 3
    assert result["successfullyCreated"] == 3
    assert result["failed"] == 0
    assert result["isFullySuccessful"] is True
    assert [a["serialNumber"] for a in result["createdAssets"]] == ["BATCH-0001", "BATCH-0002", "BATCH-0003"]
    assert [a["assetCode"] for a in result["createdAssets"]] == [
        f"LAP-{YEAR:02d}-DELL-00001",
        f"LAP-{YEAR:02d}-DELL-00002",
        f"LAP-{YEAR:02d}-DELL-00003",
    ]
    assert all(a["status"] == "Stock" for a in result["createdAssets"])

    response = await client.get("/api/v1/assets/all", headers=auth_headers)
    assert len(response.json()) == 3


@pytest.mark.asyncio
async def test_bulk_create_records_created_events(client: AsyncClient, auth_headers: dict):
    response = await client.post("/api/v1/assets/bulk", json=_bulk_payload(quantity=1), headers=auth_headers)
    asset_id = response.json()["createdAssets"][0]["id"]

    response = await client.get(f"/api/v1/assets/{asset_id}/events", headers=auth_headers)
    assert [e["eventType"] for e in response.json()] == ["Created"]


@pytest.mark.asyncio
async def test_bulk_dummy_assets(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/v1/assets/bulk", json=_bulk_payload(quantity=2, isDummy=True), headers=auth_headers
    )
    codes = [a["assetCode"] for a in response.json()["createdAssets"]]
    assert codes == [f"DUM-LAP-{YEAR:02d}-DELL-90001", f"DUM-LAP-{YEAR:02d}-DELL-90002"]


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [0, 101])
async def test_bulk_quantity_out_of_range(client: AsyncClient, auth_headers: dict, quantity: int):
    response = await client.post("/api/v1/assets/bulk", json=_bulk_payload(quantity=quantity), headers=auth_headers)
    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["quantity"]


@pytest.mark.asyncio
async def test_bulk_requires_serial_prefix(client: AsyncClient, auth_headers: dict):
    payload = _bulk_payload()
    del payload["serialNumberPrefix"]
    response = await client.post("/api/v1/assets/bulk", json=payload, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "serialNumberPrefix", "message": "Serial number prefix is required"}]


@pytest.mark.asyncio
async def test_bulk_serial_conflict_creates_nothing(client: AsyncClient, auth_headers: dict):
    await client.post(
        "/api/v1/assets",
        json={
            "assetCodePrefix": "LAP",
            "assetName": "Existing",
            "category": "Computing",
            "serialNumber": "BATCH-0002",
        },
        headers=auth_headers,
    )

    response = await client.post("/api/v1/assets/bulk", json=_bulk_payload(), headers=auth_headers)
    assert response.status_code == 409
    assert "BATCH-0002" in response.json()["error"]

    response = await client.get("/api/v1/assets/all", headers=auth_headers)
    assert [a["serialNumber"] for a in response.json()] == ["BATCH-0002"]


@pytest.mark.asyncio
async def test_bulk_has_its_own_rate_limit(client: AsyncClient, auth_headers: dict, monkeypatch):
    monkeypatch.setitem(rate_limit.POLICIES, "bulk", RateLimitPolicy("bulk", "1/minute", 0))

    first = await client.post("/api/v1/assets/bulk", json=_bulk_payload(quantity=1), headers=auth_headers)
    assert first.status_code == 200

    second = await client.post(
        "/api/v1/assets/bulk", json=_bulk_payload(quantity=1, serialNumberPrefix="NEXT"), headers=auth_headers
    )
    assert second.status_code == 429
    body = second.json()
    assert body["statusCode"] == 429
    assert body["retryAfterSeconds"] >= 1
    assert second.headers["Retry-After"] == str(body["retryAfterSeconds"])

    # Single-asset routes use the general policy
    response = await client.get("/api/v1/assets", headers=auth_headers)
    assert response.status_code == 200
