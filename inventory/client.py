"""
Async client for the inventory API.

Mirrors the data-access calls of the web frontend. Errors come back as
``InventoryApiError`` carrying the fields of the API's error envelope.
"""
import logging
from collections.abc import Awaitable, Callable
from typing import Any
from uuid import UUID

import httpx

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Awaitable[str | None]]


class InventoryApiError(Exception):
    def __init__(
        self,
        status_code: int,
        error: str,
        correlation_id: str | None = None,
        errors: list[dict] | None = None,
    ):
        self.status_code = status_code
        self.error = error
        self.correlation_id = correlation_id
        self.errors = errors or []
        super().__init__(f"{status_code}: {error}")


class InventoryClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token_provider: TokenProvider | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        self._token_provider = token_provider
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._prefix = "/api/v1"

    async def __aenter__(self) -> "InventoryClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _headers(self, correlation_id: str | None) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token_provider is not None:
            token = await self._token_provider()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        if correlation_id:
            headers["X-Correlation-ID"] = correlation_id
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json: Any = None,
        correlation_id: str | None = None,
    ) -> Any:
        resp = await self._client.request(
            method,
            f"{self._prefix}{path}",
            params={k: v for k, v in (params or {}).items() if v is not None},
            json=json,
            headers=await self._headers(correlation_id),
        )
        if resp.is_error:
            raise _error_from_response(resp)
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    # Assets

    async def get_assets(
        self, status: str | None = None, page_number: int = 1, page_size: int = 50, **kw
    ) -> dict:
        params = {"status": status, "pageNumber": page_number, "pageSize": page_size}
        return await self._request("GET", "/assets", params=params, **kw)

    async def get_asset(self, asset_id: UUID | str, **kw) -> dict:
        return await self._request("GET", f"/assets/{asset_id}", **kw)

    async def get_asset_by_code(self, code: str, **kw) -> dict:
        return await self._request("GET", f"/assets/by-code/{code}", **kw)

    async def create_asset(self, data: dict, **kw) -> dict:
        return await self._request("POST", "/assets", json=data, **kw)

    async def update_asset(self, asset_id: UUID | str, data: dict, **kw) -> dict:
        return await self._request("PUT", f"/assets/{asset_id}", json=data, **kw)

    async def delete_asset(self, asset_id: UUID | str, **kw) -> None:
        await self._request("DELETE", f"/assets/{asset_id}", **kw)

    async def bulk_create_assets(self, data: dict, **kw) -> dict:
        return await self._request("POST", "/assets/bulk", json=data, **kw)

    async def asset_code_exists(self, code: str, **kw) -> bool:
        result = await self._request("GET", "/assets/code-exists", params={"code": code}, **kw)
        return bool(result["exists"])

    # Templates and leases

    async def get_templates(self, **kw) -> list[dict]:
        return await self._request("GET", "/asset-templates", **kw)

    async def get_leases_for_asset(self, asset_id: UUID | str, **kw) -> list[dict]:
        return await self._request("GET", f"/lease-contracts/by-asset/{asset_id}", **kw)


def _error_from_response(resp: httpx.Response) -> InventoryApiError:
    try:
        body = resp.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    error = InventoryApiError(
        status_code=resp.status_code,
        error=body.get("error") or resp.reason_phrase or "Request failed",
        correlation_id=body.get("correlationId") or resp.headers.get("X-Correlation-ID"),
        errors=body.get("errors"),
    )
    logger.debug("Inventory API returned %d: %s", error.status_code, error.error)
    return error
