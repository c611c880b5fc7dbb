from datetime import datetime, timedelta, timezone

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from httpx import AsyncClient
from jose import jwk, jwt

from inventory.config import settings
from inventory.core import security
from inventory.core.dependencies import CurrentUser
from inventory.core.security import create_access_token, decode_token
from inventory.main import check_required_settings


@pytest.fixture(scope="module")
def rsa_keys():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()
    public_pem = private_key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    public_jwk = jwk.construct(public_pem, "RS256").to_dict()
    public_jwk["kid"] = "test-key"
    return private_pem, {"keys": [public_jwk]}


@pytest.fixture
def entra(monkeypatch, rsa_keys):
    monkeypatch.setattr(settings, "AUTH_MODE", "entra")
    monkeypatch.setattr(settings, "AZURE_AD_TENANT_ID", "tenant-id")
    monkeypatch.setattr(settings, "AZURE_AD_CLIENT_ID", "client-id")

    async def fake_signing_keys(force_refresh: bool = False):
        return rsa_keys[1]

    monkeypatch.setattr(security, "get_signing_keys", fake_signing_keys)
    return rsa_keys[0]


def _entra_token(private_pem: str, **overrides) -> str:
    claims = {
        "oid": "33333333-3333-3333-3333-333333333333",
        "name": "Entra User",
        "preferred_username": "entra.user@diepenbeek.be",
        "roles": ["Global Administrator"],
        "aud": "api://client-id",
        "iss": "https://login.microsoftonline.com/tenant-id/v2.0",
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
    }
    claims.update(overrides)
    return jwt.encode(claims, private_pem, algorithm="RS256", headers={"kid": "test-key"})


@pytest.mark.asyncio
async def test_local_token_round_trip():
    token = create_access_token("user-1", {"roles": ["Admin"]})
    claims = await decode_token(token)
    assert claims["sub"] == "user-1"
    assert claims["oid"] == "user-1"
    assert claims["roles"] == ["Admin"]


@pytest.mark.asyncio
async def test_expired_local_token_is_rejected():
    token = create_access_token("user-1", {"exp": datetime.now(timezone.utc) - timedelta(minutes=1)})
    with pytest.raises(ValueError):
        await decode_token(token)


@pytest.mark.asyncio
async def test_token_signed_with_another_secret_is_rejected():
    token = jwt.encode({"sub": "user-1"}, "some-other-secret", algorithm="HS256")
    with pytest.raises(ValueError):
        await decode_token(token)


@pytest.mark.asyncio
async def test_entra_token_is_accepted(entra):
    claims = await decode_token(_entra_token(entra))
    assert claims["name"] == "Entra User"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"aud": "api://someone-else"},
        {"iss": "https://login.microsoftonline.com/other-tenant/v2.0"},
        {"exp": datetime.now(timezone.utc) - timedelta(minutes=5)},
    ],
)
async def test_entra_token_claims_are_checked(entra, overrides):
    with pytest.raises(ValueError):
        await decode_token(_entra_token(entra, **overrides))


@pytest.mark.asyncio
async def test_current_user_from_entra_token(client: AsyncClient, entra):
    response = await client.get(
        "/api/v1/user/me", headers={"Authorization": f"Bearer {_entra_token(entra)}"}
    )
    assert response.status_code == 200
    assert response.json() == {
        "oid": "33333333-3333-3333-3333-333333333333",
        "name": "Entra User",
        "email": "entra.user@diepenbeek.be",
        "roles": ["Global Administrator"],
        "isAdmin": True,
    }


@pytest.mark.asyncio
async def test_current_user_from_local_token(client: AsyncClient, auth_headers: dict):
    response = await client.get("/api/v1/user/me", headers=auth_headers)
    body = response.json()
    assert body["name"] == "Test User"
    assert body["email"] == "test.user@diepenbeek.be"
    assert body["isAdmin"] is False


def test_admin_roles():
    assert CurrentUser(oid="1", roles=["Admin"]).is_admin
    assert CurrentUser(oid="1", roles=["Global Administrator"]).is_admin
    assert not CurrentUser(oid="1", roles=["Reader"]).is_admin


def test_required_settings_outside_development(monkeypatch):
    monkeypatch.setattr(settings, "APP_ENV", "production")
    monkeypatch.setattr(settings, "AUTH_MODE", "entra")
    with pytest.raises(RuntimeError, match="AZURE_AD_TENANT_ID"):
        check_required_settings()

    monkeypatch.setattr(settings, "AUTH_MODE", "local")
    check_required_settings()
