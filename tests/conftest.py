import os

# Configure before the application modules read their settings
os.environ["APP_ENV"] = "development"
os.environ["AUTH_MODE"] = "local"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["AZURE_AD_TENANT_ID"] = ""
os.environ["AZURE_AD_CLIENT_ID"] = ""
os.environ["AZURE_AD_CLIENT_SECRET"] = ""

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from inventory.config import settings
from inventory.core import rate_limit, security
from inventory.core.security import create_access_token
from inventory.db.base import Base
from inventory.db.session import get_db
from inventory.main import create_app
from inventory.services import graph_client
from inventory.services.asset_type_service import seed_asset_types

# In-memory SQLite, one database per test
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture(autouse=True)
async def reset_rate_limiter():
    """Reset rate-limit counters and queues between tests to prevent cross-test pollution."""
    rate_limit.limiter.reset()
    rate_limit.POLICIES.update(rate_limit.build_policies())
    yield
    rate_limit.limiter.reset()


@pytest_asyncio.fixture(autouse=True)
async def reset_token_caches():
    security.clear_jwks_cache()
    graph_client.clear_token_cache()
    yield
    security.clear_jwks_cache()
    graph_client.clear_token_cache()


@pytest_asyncio.fixture
async def engine():
    import inventory.models  # noqa: F401

    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(test_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncIterator[AsyncSession]:
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        await seed_asset_types(session)
        await session.commit()
        yield session


@pytest_asyncio.fixture
async def app(db_session: AsyncSession):
    application = create_app()

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest_asyncio.fixture
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def user_token() -> str:
    return create_access_token(
        "11111111-1111-1111-1111-111111111111",
        {"name": "Test User", "preferred_username": "test.user@diepenbeek.be", "roles": []},
    )


@pytest_asyncio.fixture
async def admin_token() -> str:
    return create_access_token(
        "22222222-2222-2222-2222-222222222222",
        {"name": "Test Admin", "email": "admin@diepenbeek.be", "roles": ["Admin"]},
    )


@pytest_asyncio.fixture
async def auth_headers(user_token: str) -> dict:
    return {"Authorization": f"Bearer {user_token}"}


@pytest_asyncio.fixture
async def admin_headers(admin_token: str) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}


class FakeGraph:
    """Stands in for the token endpoint and Graph, recording every request."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.token_payload: dict = {"access_token": "graph-token", "expires_in": 3600}
        self.respond = lambda request: httpx.Response(404, json={"error": {"code": "Request_ResourceNotFound"}})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/oauth2/v2.0/token"):
            return httpx.Response(200, json=self.token_payload)
        return self.respond(request)

    def graph_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "graph.microsoft.com"]


@pytest.fixture
def graph(monkeypatch) -> FakeGraph:
    monkeypatch.setattr(settings, "AZURE_AD_TENANT_ID", "tenant-id")
    monkeypatch.setattr(settings, "AZURE_AD_CLIENT_ID", "client-id")
    monkeypatch.setattr(settings, "AZURE_AD_CLIENT_SECRET", "client-secret")
    fake = FakeGraph()
    monkeypatch.setattr(
        graph_client, "_make_client", lambda: httpx.AsyncClient(transport=httpx.MockTransport(fake.handler))
    )
    return fake
