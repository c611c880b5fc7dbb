import pytest
from httpx import ASGITransport, AsyncClient

from inventory.db.session import get_db


@pytest.mark.asyncio
async def test_health_endpoint(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_health_reports_unavailable_database(app):
    class BrokenSession:
        async def execute(self, *args, **kwargs):
            raise ConnectionError("database unreachable")

    async def broken_db():
        yield BrokenSession()

    app.dependency_overrides[get_db] = broken_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/health")
    assert response.status_code == 503
    assert response.json()["status"] == "unavailable"


@pytest.mark.asyncio
async def test_health_needs_no_auth_and_has_correlation_id(client: AsyncClient):
    response = await client.get("/health")
    assert response.headers["X-Correlation-ID"]
