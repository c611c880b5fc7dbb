import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from inventory import __version__
from inventory.config import settings
from inventory.core.logging import configure_logging
from inventory.core.middleware import setup_middleware
from inventory.db.session import get_db

logger = logging.getLogger(__name__)


async def ensure_tables() -> None:
    """Create DB tables if they don't exist yet."""
    from inventory.db.base import Base
    from inventory.db.engine import engine
    import inventory.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def _seed_asset_types() -> None:
    from inventory.db.engine import async_session_factory
    from inventory.services.asset_type_service import seed_asset_types

    async with async_session_factory() as db:
        await seed_asset_types(db)
        await db.commit()


def check_required_settings() -> None:
    if settings.is_development:
        return
    missing = settings.missing_required_settings()
    if missing:
        raise RuntimeError(f"Missing required configuration: {', '.join(missing)}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    check_required_settings()

    try:
        await ensure_tables()
        await _seed_asset_types()
    except Exception as e:
        logger.warning("Database initialisation skipped: %s", e)

    logger.info("Djoppie Inventory API started (env=%s, auth=%s)", settings.APP_ENV, settings.AUTH_MODE)
    yield

    from inventory.db.engine import engine
    await engine.dispose()


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Djoppie Inventory API",
        version=__version__,
        description="IT asset inventory with Intune device lookups",
        debug=settings.APP_DEBUG,
        lifespan=lifespan,
    )

    setup_middleware(app)

    from inventory.core.rate_limit import limiter
    app.state.limiter = limiter

    @app.get("/health")
    async def health_check(db: AsyncSession = Depends(get_db)):
        try:
            await db.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Health check failed: %s", e)
            return JSONResponse(status_code=503, content={"status": "unavailable"})
        return {"status": "ok"}

    # Register API routers
    from inventory.api.v1 import router as api_v1_router
    app.include_router(api_v1_router, prefix="/api/v1")

    return app


app = create_app()
