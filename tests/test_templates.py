import uuid

import pytest
from httpx import AsyncClient


async def _create_template(client: AsyncClient, headers: dict, **overrides):
    payload = {
        "templateName": "Standard laptop",
        "assetName": "Dell Latitude 5440",
        "category": "Computing",
        "brand": "Dell",
        "model": "Latitude 5440",
        "purchaseDate": "2025-01-15",
        "warrantyExpiry": "2028-01-15",
    }
    payload.update(overrides)
    return await client.post("/api/v1/asset-templates", json=payload, headers=headers)


@pytest.mark.asyncio
async def test_create_and_get_template(client: AsyncClient, auth_headers: dict):
    response = await _create_template(client, auth_headers)
    assert response.status_code == 201
    created = response.json()
    assert created["isActive"] is True
    assert created["warrantyExpiry"] == "2028-01-15"

    response = await client.get(f"/api/v1/asset-templates/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["templateName"] == "Standard laptop"


@pytest.mark.asyncio
async def test_template_validation(client: AsyncClient, auth_headers: dict):
    response = await _create_template(
        client, auth_headers, templateName=" ", category=None, warrantyExpiry="2024-01-01"
    )
    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["templateName", "category", "warrantyExpiry"]


@pytest.mark.asyncio
async def test_list_hides_inactive_templates(client: AsyncClient, auth_headers: dict):
    active = (await _create_template(client, auth_headers, templateName="A laptop")).json()
    retired = (await _create_template(client, auth_headers, templateName="B laptop")).json()

    response = await client.put(
        f"/api/v1/asset-templates/{retired['id']}",
        json={"templateName": "B laptop", "category": "Computing", "isActive": False},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["isActive"] is False
    assert response.json()["brand"] is None

    response = await client.get("/api/v1/asset-templates", headers=auth_headers)
    assert [t["id"] for t in response.json()] == [active["id"]]

    response = await client.get("/api/v1/asset-templates?includeInactive=true", headers=auth_headers)
    assert [t["templateName"] for t in response.json()] == ["A laptop", "B laptop"]


@pytest.mark.asyncio
async def test_delete_template(client: AsyncClient, auth_headers: dict):
    created = (await _create_template(client, auth_headers)).json()
    response = await client.delete(f"/api/v1/asset-templates/{created['id']}", headers=auth_headers)
    assert response.status_code == 204

    response = await client.get(f"/api/v1/asset-templates/{created['id']}", headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_unknown_template_on_asset_create(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/v1/assets",
        json={
            "assetCodePrefix": "LAP",
            "assetName": "Laptop",
            "category": "Computing",
            "serialNumber": "SN-T",
            "templateId": str(uuid.uuid4()),
        },
        headers=auth_headers,
    )
    assert response.status_code == 404
