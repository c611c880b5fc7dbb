import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport

from inventory.client import InventoryApiError, InventoryClient


@pytest_asyncio.fixture
async def api(app, user_token):
    async def token_provider():
        return user_token

    http_client = httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    async with http_client:
        yield InventoryClient(token_provider=token_provider, http_client=http_client)


@pytest.mark.asyncio
async def test_create_and_read_back(api: InventoryClient):
    created = await api.create_asset(
        {"assetCodePrefix": "TAB", "assetName": "iPad", "category": "Mobile", "serialNumber": "TAB-1", "brand": "Apple"}
    )
    assert created["assetCode"].startswith("TAB-")
    assert await api.asset_code_exists(created["assetCode"]) is True

    fetched = await api.get_asset(created["id"])
    assert fetched["serialNumber"] == "TAB-1"
    assert (await api.get_asset_by_code(created["assetCode"]))["id"] == created["id"]

    page = await api.get_assets(status="Stock")
    assert page["totalCount"] == 1

    assert await api.get_leases_for_asset(created["id"]) == []
    assert await api.get_templates() == []

    await api.delete_asset(created["id"])
    assert await api.asset_code_exists(created["assetCode"]) is False


@pytest.mark.asyncio
async def test_bulk_through_client(api: InventoryClient):
    result = await api.bulk_create_assets(
        {
            "assetCodePrefix": "MON",
            "assetName": "Monitor",
            "category": "Display",
            "serialNumberPrefix": "MON",
            "quantity": 2,
        }
    )
    assert result["successfullyCreated"] == 2


@pytest.mark.asyncio
async def test_validation_error_is_raised_with_details(api: InventoryClient):
    with pytest.raises(InventoryApiError) as exc_info:
        await api.create_asset({"assetCodePrefix": "LAP"}, correlation_id="client-corr")
    error = exc_info.value
    assert error.status_code == 400
    assert error.correlation_id == "client-corr"
    assert {e["field"] for e in error.errors} == {"assetName", "category", "serialNumber"}


@pytest.mark.asyncio
async def test_missing_token_is_unauthorized(app):
    http_client = httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    async with InventoryClient(http_client=http_client) as api:
        with pytest.raises(InventoryApiError) as exc_info:
            await api.get_assets()
    await http_client.aclose()
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_non_json_error_body():
    transport = httpx.MockTransport(lambda request: httpx.Response(502, text="Bad gateway"))
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        api = InventoryClient(http_client=http_client)
        with pytest.raises(InventoryApiError) as exc_info:
            await api.get_asset("abc")
    assert exc_info.value.status_code == 502
    assert exc_info.value.error == "Bad Gateway"
