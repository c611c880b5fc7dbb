"""
Bearer token validation.

``AUTH_MODE=entra`` checks RS256 access tokens from the Microsoft identity
platform against the tenant's signing keys. ``AUTH_MODE=local`` checks HS256
tokens signed with ``JWT_SECRET_KEY``, which is what development and the test
suite use.
"""
import logging
import time
import uuid
from datetime import datetime, timedelta, timezone

import httpx
from jose import JWTError, jwt

from inventory.config import settings

logger = logging.getLogger(__name__)

_jwks_cache: dict = {"keys": None, "fetched_at": 0.0}


def create_access_token(subject: str, extra_claims: dict | None = None, expires_minutes: int | None = None) -> str:
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode = {"sub": subject, "oid": subject, "exp": expire, "jti": str(uuid.uuid4())}
    if extra_claims:
        to_encode.update(extra_claims)
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def jwks_url() -> str:
    return f"{settings.AZURE_AD_INSTANCE}/{settings.AZURE_AD_TENANT_ID}/discovery/v2.0/keys"


async def get_signing_keys(force_refresh: bool = False) -> dict:
    now = time.monotonic()
    cached = _jwks_cache["keys"]
    if cached and not force_refresh and now - _jwks_cache["fetched_at"] < settings.JWKS_CACHE_SECONDS:
        return cached

    async with httpx.AsyncClient(timeout=10.0) as client:
        response = await client.get(jwks_url())
        response.raise_for_status()
        keys = response.json()

    _jwks_cache["keys"] = keys
    _jwks_cache["fetched_at"] = now
    logger.info("Fetched %d signing key(s) from %s", len(keys.get("keys", [])), jwks_url())
    return keys


def clear_jwks_cache() -> None:
    _jwks_cache["keys"] = None
    _jwks_cache["fetched_at"] = 0.0


async def _decode_entra(token: str) -> dict:
    try:
        keys = await get_signing_keys()
    except httpx.HTTPError as e:
        raise ValueError(f"Could not fetch signing keys: {e}") from e

    options = {"verify_aud": bool(settings.token_audience)}
    try:
        return jwt.decode(
            token,
            keys,
            algorithms=["RS256"],
            audience=settings.token_audience or None,
            issuer=settings.token_issuer,
            options=options,
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e}") from e


def _decode_local(token: str) -> dict:
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise ValueError(f"Invalid token: {e}") from e


async def decode_token(token: str) -> dict:
    """Return the token's claims, or raise ValueError."""
    if settings.AUTH_MODE == "local":
        return _decode_local(token)
    return await _decode_entra(token)
