import logging

import pytest
from httpx import AsyncClient

from inventory.config import settings
from inventory.core.errors import resolve
from inventory.core.exceptions import ConcurrencyError, NotFoundError, ValidationFailedError
from inventory.core.logging import CorrelationIdFilter, correlation_id_var


@pytest.fixture
def failing_app(app):
    async def boom():
        raise RuntimeError("database exploded")

    async def missing():
        raise KeyError("asset")

    app.add_api_route("/boom", boom)
    app.add_api_route("/missing", missing)
    return app


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client: AsyncClient, auth_headers: dict):
    response = await client.get("/health", headers={"X-Correlation-ID": "abc-123"})
    assert response.headers["X-Correlation-ID"] == "abc-123"


@pytest.mark.asyncio
async def test_correlation_id_is_generated(client: AsyncClient):
    response = await client.get("/health")
    assert len(response.headers["X-Correlation-ID"]) == 36


@pytest.mark.asyncio
async def test_security_headers(client: AsyncClient):
    response = await client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "Strict-Transport-Security" not in response.headers


@pytest.mark.asyncio
async def test_error_envelope_in_development(client: AsyncClient, failing_app):
    response = await client.get("/boom", headers={"X-Correlation-ID": "corr-1"})
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "An unexpected error occurred. Please try again later."
    assert body["statusCode"] == 500
    assert body["correlationId"] == "corr-1"
    assert body["timestamp"]
    assert body["detail"] == "database exploded"
    assert body["exceptionType"] == "RuntimeError"
    assert "RuntimeError" in body["stackTrace"]
    assert response.headers["X-Correlation-ID"] == "corr-1"


@pytest.mark.asyncio
async def test_error_envelope_in_production_hides_internals(client: AsyncClient, failing_app, monkeypatch):
    monkeypatch.setattr(settings, "APP_ENV", "production")
    response = await client.get("/boom")
    body = response.json()
    assert response.status_code == 500
    assert set(body) == {"error", "statusCode", "correlationId", "timestamp"}


@pytest.mark.asyncio
async def test_key_error_maps_to_not_found(client: AsyncClient, failing_app):
    response = await client.get("/missing")
    assert response.status_code == 404
    assert response.json()["error"] == "The requested resource was not found."


@pytest.mark.asyncio
async def test_unauthorized_envelope(client: AsyncClient):
    response = await client.get("/api/v1/user/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    body = response.json()
    assert body["error"] == "Invalid or expired token"
    assert body["correlationId"] == response.headers["X-Correlation-ID"]


@pytest.mark.asyncio
async def test_unknown_route_uses_envelope(client: AsyncClient):
    response = await client.get("/api/v1/nothing-here")
    assert response.status_code == 404
    assert response.json()["statusCode"] == 404


def test_error_table_order():
    assert resolve(ValidationFailedError([])) == (400, "One or more validation errors occurred.")
    assert resolve(ConcurrencyError())[0] == 409
    assert resolve(NotFoundError("Asset gone")) == (404, "Asset gone")
    assert resolve(PermissionError("nope"))[0] == 403
    assert resolve(ValueError("bad value")) == (400, "bad value")
    assert resolve(TimeoutError())[0] == 504
    assert resolve(Exception("x"))[0] == 500


def test_log_records_carry_correlation_id():
    record = logging.LogRecord("inventory", logging.INFO, __file__, 1, "hello", None, None)
    token = correlation_id_var.set("corr-42")
    try:
        CorrelationIdFilter().filter(record)
    finally:
        correlation_id_var.reset(token)
    assert record.correlation_id == "corr-42"

    CorrelationIdFilter().filter(record)
    assert record.correlation_id == "-"
