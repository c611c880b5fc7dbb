"""Shared Microsoft Graph access: client-credentials token and GET helper."""
import logging
import time

import httpx

from inventory.config import settings
from inventory.core.exceptions import BadRequestError, IntegrationError
from inventory.core.odata import is_valid_filter_value

logger = logging.getLogger(__name__)

# Client-credentials token, refreshed a minute before it expires
_token_cache: dict = {"access_token": None, "expires_at": 0.0}


def _make_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.GRAPH_TIMEOUT_SECONDS)


def clear_token_cache() -> None:
    _token_cache["access_token"] = None
    _token_cache["expires_at"] = 0.0


def ensure_filter_value(value: str, what: str) -> None:
    if not is_valid_filter_value(value):
        raise BadRequestError(f"{what} contains invalid characters")


def _token_url() -> str:
    return f"{settings.AZURE_AD_INSTANCE}/{settings.AZURE_AD_TENANT_ID}/oauth2/v2.0/token"


async def _get_access_token(client: httpx.AsyncClient) -> str:
    if _token_cache["access_token"] and time.monotonic() < _token_cache["expires_at"]:
        return _token_cache["access_token"]

    resp = await client.post(
        _token_url(),
        data={
            "grant_type": "client_credentials",
            "client_id": settings.AZURE_AD_CLIENT_ID,
            "client_secret": settings.AZURE_AD_CLIENT_SECRET,
            "scope": settings.GRAPH_SCOPE,
        },
    )
    resp.raise_for_status()
    payload = resp.json()
    if not isinstance(payload, dict) or not payload.get("access_token"):
        logger.error("Token response from %s did not contain an access token", settings.AZURE_AD_INSTANCE)
        raise IntegrationError()
    _token_cache["access_token"] = payload["access_token"]
    _token_cache["expires_at"] = time.monotonic() + max(int(payload.get("expires_in", 3600)) - 60, 0)
    return _token_cache["access_token"]


async def graph_get(path: str, params: dict | None = None) -> dict | None:
    """GET a Graph resource. Returns None on 404."""
    if not settings.graph_enabled:
        raise IntegrationError("Microsoft Intune integration is not configured.")

    try:
        async with _make_client() as client:
            token = await _get_access_token(client)
            resp = await client.get(
                f"{settings.GRAPH_BASE_URL}/{path}",
                params=params,
                headers={"Authorization": f"Bearer {token}", "Accept": "application/json"},
            )
            if resp.status_code == 404:
                return None
            resp.raise_for_status()
            return resp.json()
    except httpx.TimeoutException:
        logger.error("Microsoft Graph request timed out: %s", path)
        raise
    except httpx.HTTPStatusError as e:
        logger.error("Microsoft Graph error on %s: status %s", path, e.response.status_code)
        raise IntegrationError() from e
    except httpx.HTTPError as e:
        logger.error("Microsoft Graph request failed on %s: %s", path, e)
        raise IntegrationError() from e
